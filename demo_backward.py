"""
Build a small expression, run one backward pass and print d(a)/d(v3).

    a = relu( ((v1 / v2) * (v3 - v2)) ** exponent )
"""

import argparse

from revgrad import GraphStore, Builder, print_graph_summary, print_computation_graph


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description='Reverse-mode gradient of a small scalar expression',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--v1', type=float, default=1.0, help='first leaf value')
    parser.add_argument('--v2', type=float, default=2.0, help='second leaf value')
    parser.add_argument('--v3', type=float, default=3.0, help='third leaf value')
    parser.add_argument('--exponent', type=float, default=10.0,
                        help='exponent applied to the product')
    parser.add_argument('--summary', action='store_true',
                        help='print the recorded graph after the backward pass')
    return parser.parse_args()


def build(b, v1, v2, v3, exponent):
    """Return the output handle for relu(((v1/v2)*(v3-v2))**exponent)."""
    ratio = b.divide(v1, v2)
    diff = b.subtract(v3, v2)
    return b.relu(b.power(b.multiply(ratio, diff), b.constant(exponent)), name="a")


def main():
    args = parse_args()

    b = Builder(GraphStore())
    v1 = b.constant(args.v1, name="v1")
    v2 = b.constant(args.v2, name="v2")
    v3 = b.constant(args.v3, name="v3")
    a = build(b, v1, v2, v3, args.exponent)

    b.store.reset_gradients()
    a.backward()

    if args.summary:
        print_graph_summary(b.store)
        print_computation_graph(b.store, max_nodes=len(b.store))

    print(v3.gradient)


if __name__ == '__main__':
    main()

"""
Example: Floating voltage source (supernode)

A 5V source sits between two nodes, neither of which is grounded:

    12V ---[R1 100]--- b ==(+5V)== a ---[R2 100]--- GND

The source ties a and b into one supernode: the solver writes one
dependency equation (Vb - Va = 5) and one combined KCL equation for the pair.
Expected: Va = 3.5V, Vb = 8.5V, 35mA through both resistors.
"""
import logging

from supernodal.dc import Network, R, VSource, balance_error, solve, write_voltages


def build():
    net = Network()
    net, s = net.node("s")
    net, a = net.node("a")
    net, b = net.node("b")

    net, _ = VSource(net, s, net.gnd, name="V1", value=12.0)
    net, _ = R(net, s, b, name="R1", value=100.0)
    net, _ = VSource(net, b, a, name="V2", value=5.0)
    net, _ = R(net, a, net.gnd, name="R2", value=100.0)
    return net, {"s": s, "a": a, "b": b}


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    net, nodes = build()
    solution = solve(net)
    solved = write_voltages(net, solution)

    print("Matrix:")
    print(solution.system.matrix)
    print("Right-hand side:", solution.system.vector)
    print()
    for name, node in nodes.items():
        print(f"   V({name}) = {solved.voltage(node):8.4f} V")
    print(f"   KCL balance error: {balance_error(solved, solution):.2e} A")


if __name__ == "__main__":
    main()

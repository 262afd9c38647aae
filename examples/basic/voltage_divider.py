"""
Example: Voltage Divider

Demonstrates the voltage divider rule: V_out = V_in * R2 / (R1 + R2)

Two examples:
1. Simple 2-resistor divider (50% division with equal resistors)
2. 4-resistor divider chain showing multiple tap points

Components used: R, VSource
"""
from supernodal.dc import Network, R, VSource, analyze, branch_current


def build_simple_divider(V_in=10.0, R1=10000.0, R2=10000.0):
    """Build a simple 2-resistor voltage divider.

    Circuit:
        Vs ---[R1]---+---[R2]--- GND
                     |
                    Vout
    """
    net = Network()
    net, n_top = net.node("top")      # Top of divider (Vs output)
    net, n_mid = net.node("mid")      # Middle tap point

    net, vs = VSource(net, n_top, net.gnd, name="vs", value=V_in)
    net, r1 = R(net, n_top, n_mid, name="R1", value=R1)
    net, r2 = R(net, n_mid, net.gnd, name="R2", value=R2)

    return net, {"top": n_top, "mid": n_mid}, {"vs": vs, "R1": r1, "R2": r2}


def build_chain_divider(V_in=10.0, R_val=10000.0):
    """Build a 4-resistor chain divider with multiple taps.

    Circuit:
        Vs ---[R1]---+---[R2]---+---[R3]---+---[R4]--- GND
                     |          |          |
                   tap1       tap2       tap3
    """
    net = Network()
    net, n_top = net.node("top")
    net, tap1 = net.node("tap1")
    net, tap2 = net.node("tap2")
    net, tap3 = net.node("tap3")

    net, vs = VSource(net, n_top, net.gnd, name="vs", value=V_in)
    net, r1 = R(net, n_top, tap1, name="R1", value=R_val)
    net, r2 = R(net, tap1, tap2, name="R2", value=R_val)
    net, r3 = R(net, tap2, tap3, name="R3", value=R_val)
    net, r4 = R(net, tap3, net.gnd, name="R4", value=R_val)

    nodes = {"top": n_top, "tap1": tap1, "tap2": tap2, "tap3": tap3}
    components = {"vs": vs, "R1": r1, "R2": r2, "R3": r3, "R4": r4}
    return net, nodes, components


def main():
    print("=" * 60)
    print("Voltage Divider Example")
    print("=" * 60)

    V_in = 10.0

    print("\n1. Simple Voltage Divider (R1 = R2 = 10k)")
    print("-" * 40)
    net, nodes, comps = build_simple_divider(V_in=V_in)
    solved = analyze(net)
    v_out = solved.voltage(nodes["mid"])
    print(f"   Input voltage:    {V_in:.2f} V")
    print(f"   Output voltage:   {v_out:.4f} V")
    print(f"   Expected (50%):   {V_in * 0.5:.2f} V")
    print(f"   Current in R1:    {branch_current(solved, comps['R1']) * 1e3:.4f} mA")

    print("\n2. Unequal Resistors (R1=10k, R2=20k)")
    print("-" * 40)
    net, nodes, _ = build_simple_divider(V_in=V_in, R2=20000.0)
    v_out_2 = analyze(net).voltage(nodes["mid"])
    print(f"   Output voltage:   {v_out_2:.4f} V")
    print(f"   Expected (2/3):   {V_in * 2 / 3:.4f} V")

    print("\n3. 4-Resistor Chain (equal 10k resistors)")
    print("-" * 40)
    net, nodes, _ = build_chain_divider(V_in=V_in)
    solved = analyze(net)
    for tap, fraction in (("tap1", 0.75), ("tap2", 0.50), ("tap3", 0.25)):
        print(f"   {tap}: {solved.voltage(nodes[tap]):.4f} V (expected: {V_in * fraction:.2f})")

    print("\n" + "=" * 60)


if __name__ == "__main__":
    main()

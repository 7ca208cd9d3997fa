"""Example: miter offsets at a three-way junction."""

import math

from panelnet import build_panels, build_topology

ARMS = [(0.0, 1.0), (-math.sqrt(3) / 2, -0.5), (math.sqrt(3) / 2, -0.5)]


def main() -> None:
    lines = [((0.0, 0.0), arm) for arm in ARMS]
    topology = build_topology(lines, 0.001)
    print("Vertices:")
    for vid, point in enumerate(topology.points):
        print(f"  {vid}: ({point[0]:.6f}, {point[1]:.6f}) neighbors={topology.vertex_vertex[vid]}")

    panels, offset_lines, free_end_lines = build_panels(topology, [1.0, 0.5], [1.0])
    print(f"Panels ({len(panels)}), free ends: {len(free_end_lines)}")
    for idx, pair in enumerate(offset_lines):
        print(f"  [{idx}] line {panels[idx].line_index}")
        for off in pair:
            tip = off.end
            print(
                f"    v{off.vertex} -> ({tip[0]:.4f}, {tip[1]:.4f}) "
                f"angle={math.degrees(off.angle):.1f} scale={off.scale:.4f} free={off.is_free_end}"
            )


if __name__ == "__main__":
    main()

"""Example pipeline: weld, offset, group and mesh a small network."""

import logging

from panelnet import MeshOptions, run_network

LINES = [
    ((0.0, 0.0), (2.0, 0.0)),
    ((2.0, 0.0), (4.0, 1.0)),
    ((2.0, 0.0), (2.0, 2.0)),
    ((2.0, 2.0), (0.0, 2.0)),
]


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s:%(name)s:%(message)s")
    options = MeshOptions(n_u=3, n_v=5, angle=0.8, deviation=0.05)
    result = run_network(LINES, 0.01, [0.4], [0.4, 0.6], options)

    print("Summary:")
    for key, value in result.summary().items():
        print(f"  {key}: {value}")
    for group_id, meshes in enumerate(result.group_meshes()):
        faces = sum(pm.mesh.face_count for pm in meshes)
        print(f"Group {group_id}: lines={result.group_lines[group_id]} faces={faces}")
    print("Fixed points:")
    for point in result.fixed_points:
        print(f"  ({point[0]:.4f}, {point[1]:.4f}, {point[2]:.4f})")


if __name__ == "__main__":
    main()

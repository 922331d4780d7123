"""A coarse outline of New Zealand.

Stands in for ``map_data("nz")`` in the coordinate systems section.
The outline only has a handful of points per island, enough to show
the difference an aspect ratio makes, not to draw an accurate map.
"""

import pyarrow as pa

ISLANDS = {
    "North.Island": [
        (172.68, -34.43), (173.00, -34.40), (174.50, -35.80), (175.00, -36.80),
        (175.80, -36.50), (176.90, -37.70), (178.55, -37.70), (178.00, -38.70),
        (177.00, -39.30), (177.10, -39.65), (176.20, -40.90), (175.30, -41.60),
        (174.80, -41.30), (175.00, -40.90), (175.00, -39.95), (173.75, -39.28),
        (174.10, -39.05), (174.80, -38.10), (174.85, -37.80), (174.55, -37.05),
        (174.10, -36.40), (173.35, -35.50),
    ],
    "South.Island": [
        (172.70, -40.50), (173.30, -41.25), (174.25, -41.70), (173.70, -42.40),
        (173.10, -43.80), (171.25, -44.40), (171.00, -45.10), (170.60, -45.90),
        (169.80, -46.45), (168.35, -46.60), (166.60, -46.15), (167.90, -44.60),
        (169.00, -43.90), (170.95, -42.70), (171.60, -41.75), (172.20, -40.80),
    ],
    "Stewart.Island": [
        (167.50, -46.75), (168.20, -46.75), (168.20, -47.20), (167.60, -47.25),
    ],
}


def outline() -> pa.Table:
    """The outline as a table of ``long, lat, group, order, region`` rows.

    Each island is a separate ``group``, ``order`` is the
    position of the point along the whole outline.
    """
    rows = []
    order = 1
    for group, (region, points) in enumerate(ISLANDS.items(), start=1):
        for long, lat in points:
            rows.append(
                {"long": long, "lat": lat, "group": group, "order": order, "region": region}
            )
            order += 1
    return pa.Table.from_pylist(rows)

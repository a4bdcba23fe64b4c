"""Static circular layout for a note's mind graph.

Nodes sit on an ellipse centred in a 600x400 viewport.  Each link is drawn
as a chord keyed on its *own* position in the link list (from angle ``i``
to angle ``i + 2`` radians), not on its endpoints' positions; the picture
is decorative and only links whose endpoints both exist are drawn.
"""

from __future__ import annotations

import math

from docbench.models.analysis import GraphLayout, LinkSegment, PositionedNode
from docbench.models.note import MindGraph

VIEW_WIDTH = 600
VIEW_HEIGHT = 400
CENTER_X = 300.0
CENTER_Y = 200.0
RADIUS_X = 150.0
RADIUS_Y = 120.0

NODE_SCALE = 1.5


def _point(angle: float) -> tuple[float, float]:
    return CENTER_X + math.cos(angle) * RADIUS_X, CENTER_Y + math.sin(angle) * RADIUS_Y


def layout_graph(graph: MindGraph) -> GraphLayout:
    node_count = len(graph.nodes)
    nodes = []
    for i, node in enumerate(graph.nodes):
        x, y = _point(i * 2 * math.pi / node_count)
        nodes.append(
            PositionedNode(
                id=node.id,
                label=node.display_label,
                x=x,
                y=y,
                radius=node.val * NODE_SCALE,
            )
        )

    node_ids = {node.id for node in graph.nodes}
    links = []
    for i, link in enumerate(graph.links):
        if link.source not in node_ids or link.target not in node_ids:
            continue
        x1, y1 = _point(i)
        x2, y2 = _point(i + 2)
        links.append(
            LinkSegment(
                source=link.source,
                target=link.target,
                x1=x1,
                y1=y1,
                x2=x2,
                y2=y2,
                width=max(1.0, link.value / 2),
            )
        )

    return GraphLayout(width=VIEW_WIDTH, height=VIEW_HEIGHT, nodes=nodes, links=links)

from __future__ import annotations

import numpy as np
import plotly.graph_objects as go

from worldgen.chunks import chunk_bounds
from worldgen.streaming import WorldStreamer


def height_profile_figure(
    streamer: WorldStreamer,
    *,
    observer_x: float | None = None,
    samples_per_chunk: int = 82,
) -> go.Figure:
    """Ground profile over the registered chunks.

    The load window is shaded, chunk edges are dotted, trees are marked at
    their trunk tops. Screen y grows downward, so the y axis is reversed.
    """

    chunks = streamer.loaded_chunks()
    size = streamer.config.chunk_size
    fig = go.Figure()
    if not chunks:
        return fig

    lo = chunk_bounds(chunk=chunks[0], chunk_size=size)[0]
    hi = chunk_bounds(chunk=chunks[-1], chunk_size=size)[1]
    n = max(int(samples_per_chunk), 2) * len(chunks)
    xs = np.linspace(float(lo), float(hi), n, dtype=np.float64)
    hs = streamer.terrain.height_field.heights(xs)

    fig.add_trace(
        go.Scatter(
            x=xs,
            y=hs,
            mode="lines",
            line=dict(color="rgb(212,123,74)", width=2),
            name="ground",
        )
    )

    trees = list(streamer.trees())
    if trees:
        fig.add_trace(
            go.Scatter(
                x=[t.trunk.center_x for t in trees],
                y=[t.trunk.top_y for t in trees],
                mode="markers",
                marker=dict(size=9, color="rgb(50,200,30)", symbol="triangle-up"),
                text=[f"leaves={len(t.leaves)} fruits={len(t.fruits)}" for t in trees],
                name="trees",
            )
        )

    if observer_x is not None:
        fig.add_vline(x=float(observer_x), line=dict(color="#ffb000", width=2))

    for c in chunks:
        fig.add_vline(
            x=float(chunk_bounds(chunk=c, chunk_size=size)[0]),
            line=dict(color="rgba(120,120,120,0.5)", width=1, dash="dot"),
        )

    if streamer.left is not None and streamer.right is not None:
        w0 = chunk_bounds(chunk=streamer.left, chunk_size=size)[0]
        w1 = chunk_bounds(chunk=streamer.right, chunk_size=size)[1]
        fig.add_vrect(x0=w0, x1=w1, fillcolor="rgba(15,118,110,0.10)", line_width=0)

    fig.update_yaxes(autorange="reversed")
    fig.update_layout(
        margin=dict(l=0, r=0, t=0, b=0),
        height=360,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
    )
    return fig


def chunk_entities_figure(streamer: WorldStreamer) -> go.Figure:
    chunks = streamer.loaded_chunks()
    blocks = [len(streamer.blocks_in(c)) for c in chunks]
    trees = [len(streamer.trees_in(c)) for c in chunks]
    colors = [
        "rgb(15,118,110)"
        if streamer.left is not None and streamer.left <= c <= streamer.right
        else "rgb(160,160,160)"
        for c in chunks
    ]

    fig = go.Figure()
    fig.add_trace(
        go.Bar(
            x=[str(c) for c in chunks],
            y=blocks,
            marker=dict(color=colors),
            name="blocks",
        )
    )
    fig.add_trace(
        go.Scatter(
            x=[str(c) for c in chunks],
            y=trees,
            mode="markers+text",
            text=[str(t) for t in trees],
            textposition="top center",
            yaxis="y2",
            name="trees",
        )
    )
    fig.update_layout(
        yaxis=dict(title="blocks"),
        yaxis2=dict(title="trees", overlaying="y", side="right", rangemode="tozero"),
        margin=dict(l=0, r=0, t=0, b=0),
        height=260,
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
    )
    return fig

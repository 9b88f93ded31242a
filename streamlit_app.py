from __future__ import annotations

import logging

import streamlit as st

from viz.export import rgb01_to_png_bytes, scene_to_rgb01
from viz.figures import chunk_entities_figure, height_profile_figure
from worldgen.config import DEFAULT_CONFIG
from worldgen.session import WorldSession

logging.basicConfig(level=logging.INFO)

st.set_page_config(
    page_title="Streaming World",
    page_icon="~",
    layout="wide",
)

CFG = DEFAULT_CONFIG


def _qp_get(name: str, default: str) -> str:
    raw = st.query_params.get(name)
    if raw is None:
        return default
    if isinstance(raw, list):
        return str(raw[0]) if raw else default
    return str(raw)


def _qp_int(name: str, default: int, *, min_value: int, max_value: int) -> int:
    try:
        v = int(float(_qp_get(name, str(default))))
    except ValueError:
        v = default
    return max(min_value, min(max_value, v))


def _session() -> WorldSession:
    seed = int(st.session_state["seed"])
    sess = st.session_state.get("world")
    if sess is None or sess.seed != seed:
        sess = WorldSession(seed=seed, config=CFG)
        st.session_state["world"] = sess
    return sess


def _walk(sess: WorldSession, distance: float, *, speed: float) -> None:
    """Walk the observer `distance` units, one frame at a time."""
    per_frame = float(speed) * CFG.frame_time
    steps = max(int(abs(distance) / max(per_frame, 1e-9)), 1)
    direction = 1.0 if distance >= 0 else -1.0
    for _ in range(steps):
        sess.step(sess.observer.x + direction * per_frame)


if "seed" not in st.session_state:
    st.session_state["seed"] = _qp_int(
        "seed", CFG.min_seed, min_value=CFG.min_seed, max_value=CFG.max_seed - 1
    )

with st.sidebar:
    st.header("World")
    st.number_input(
        "Seed",
        min_value=CFG.min_seed,
        max_value=CFG.max_seed - 1,
        step=1,
        key="seed",
    )
    speed = st.slider("Walk speed (units/s)", 100, 2000, 300, step=50)
    distance = st.slider("Walk distance", 100, 5000, 820, step=10)

sess = _session()

st.title("Streaming World")

c_left, c_stay, c_right = st.columns(3)
with c_left:
    if st.button("Walk left", width="stretch"):
        _walk(sess, -float(distance), speed=float(speed))
with c_stay:
    if st.button("Wait one frame", width="stretch"):
        sess.step(sess.observer.x)
with c_right:
    if st.button("Walk right", width="stretch"):
        _walk(sess, float(distance), speed=float(speed))

streamer = sess.streamer
left, right = streamer.window

m1, m2, m3, m4, m5 = st.columns(5)
m1.metric("Observer x", f"{sess.observer.x:.0f}")
m2.metric("Observer chunk", str(streamer.chunk_of(sess.observer.x)))
m3.metric("Window", f"[{left}, {right}]")
m4.metric("Registered chunks", str(len(streamer.loaded_chunks())))
m5.metric("Energy", f"{sess.observer.energy:.0f}")

st.plotly_chart(
    height_profile_figure(streamer, observer_x=sess.observer.x),
    width="stretch",
)

tab_view, tab_chunks, tab_stats = st.tabs(["Viewport", "Chunks", "Stats"])

with tab_view:
    half = CFG.window_width * 0.5
    rgb = scene_to_rgb01(
        sess.scene,
        left=sess.observer.x - half,
        right=sess.observer.x + half,
        top=0.0,
        bottom=CFG.window_height,
        pixels_per_unit=0.5,
        t=sess.time,
    )
    png = rgb01_to_png_bytes(rgb)
    st.image(png, width="stretch")
    st.download_button("Download PNG", png, file_name=f"world_{sess.seed}.png")

with tab_chunks:
    st.plotly_chart(chunk_entities_figure(streamer), width="stretch")

with tab_stats:
    s = streamer.stats
    st.json(
        {
            "seed": sess.seed,
            "time": round(sess.time, 3),
            "chunks_built": s.built,
            "chunks_evicted": s.evicted,
            "reentries": s.reentered,
            "triggers": s.triggers,
            "pending_regrowth": len(sess.scheduler),
            "loaded": streamer.loaded_chunks(),
        }
    )

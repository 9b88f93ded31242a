from __future__ import annotations

import time

from worldgen.config import DEFAULT_CONFIG
from worldgen.session import WorldSession


def _timeit(label: str, fn) -> float:
    t0 = time.perf_counter()
    fn()
    t1 = time.perf_counter()
    ms = (t1 - t0) * 1000.0
    print(f"{label}: {ms:.2f} ms")
    return ms


def main() -> None:
    """Quick CPU benchmark for chunk streaming.

    A chunk is built inside a single frame, so one build should stay well
    under the frame budget (about 22 ms at 45 fps).
    """

    cfg = DEFAULT_CONFIG
    budget_ms = cfg.frame_time * 1000.0
    sess = WorldSession(seed=cfg.min_seed, config=cfg)
    streamer = sess.streamer

    chunk = streamer.window[1] + 10
    _timeit(
        "Streaming: load_chunk (terrain + flora)",
        lambda: streamer.load_chunk(chunk),
    )
    _timeit("Streaming: evict", lambda: streamer.evict(chunk))

    xs = [float(x) for x in range(0, cfg.chunk_size * 50, 10)]
    worst = 0.0
    t_all = time.perf_counter()
    for x in xs:
        t0 = time.perf_counter()
        sess.step(x)
        worst = max(worst, (time.perf_counter() - t0) * 1000.0)
    total = (time.perf_counter() - t_all) * 1000.0
    print(f"Walk 50 chunks: {len(xs)} frames in {total:.2f} ms")
    print(f"Worst frame: {worst:.2f} ms (budget {budget_ms:.2f} ms)")
    print(f"Chunks built: {streamer.stats.built}, evicted: {streamer.stats.evicted}")


if __name__ == "__main__":
    main()

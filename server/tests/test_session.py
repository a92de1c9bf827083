"""Playback session and autoplay tests

The session is a trace plus a cursor; autoplay advances the cursor from an
asyncio task that can be paused, resumed and cancelled at any point
without touching the trace.
"""

import asyncio

import pytest

from graph import parse
from server import CONFIG, AutoPlayer, PlaybackSession, PlaybackStatus, configure, summarize_step
from sorting import run_bfs, run_dfs

SAMPLE = "0: 1,2\n1: 3\n2: 3\n3: 4\n4:"


def make_session(text: str = SAMPLE, engine=run_dfs) -> PlaybackSession:
    graph = parse(text)
    return PlaybackSession(graph, engine(graph))


class TestPlaybackSession:
    """Manual stepping over a trace."""

    def test_starts_at_first_step(self):
        session = make_session()
        assert session.cursor == 0
        assert session.current_step.index == 0
        assert not session.is_finished
        assert session.summary is None

    def test_next_until_final(self):
        session = make_session()
        seen = [session.current_step.index]
        while (step := session.next_step()) is not None:
            seen.append(step.index)
        assert seen == list(range(session.total_steps))
        assert session.is_finished
        assert session.next_step() is None
        assert session.cursor == session.total_steps - 1

    def test_reset(self):
        session = make_session()
        session.next_step()
        session.next_step()
        assert session.reset().index == 0
        assert session.cursor == 0

    def test_log_up_to_cursor(self):
        session = make_session()
        session.next_step()
        log = session.log()
        assert [entry.label for entry in log] == [
            "Step 1: Starting DFS-based Topological Sort",
            "Step 2: Visiting node 0",
        ]
        assert log[-1].active

    def test_success_summary(self):
        session = make_session(engine=run_bfs)
        while session.next_step() is not None:
            pass
        assert session.summary == "Final topological order (BFS): 0 → 1 → 2 → 3 → 4"
        assert session.failure is None

    def test_bfs_failure_summary_has_no_path(self):
        session = make_session("0: 1\n1: 0", engine=run_bfs)
        while session.next_step() is not None:
            pass
        assert session.summary == "Cycle detected: a topological sort is not possible."
        assert session.failure == "incomplete_order"

    def test_summarize_dfs_cycle(self):
        trace = run_dfs(parse("a: b\nb: a"))
        assert summarize_step(trace.final_step, "dfs") == "Cycle detected: a → b → a"


class TestAutoPlayer:
    """Timed playback: start, pause, resume, cancel."""

    def test_plays_to_the_end(self):
        session = make_session()
        received = []

        async def scenario():
            player = AutoPlayer(session, interval=0, on_step=received.append)
            player.start()
            await player.wait()
            return player.status

        status = asyncio.run(scenario())
        assert status == PlaybackStatus.FINISHED
        assert session.is_finished
        assert [step.index for step in received] == list(range(1, session.total_steps))

    def test_async_callback_awaited(self):
        session = make_session("a: b\nb:")
        received = []

        async def on_step(step):
            await asyncio.sleep(0)
            received.append(step.index)

        async def scenario():
            player = AutoPlayer(session, interval=0, on_step=on_step)
            player.start()
            await player.wait()

        asyncio.run(scenario())
        assert received == list(range(1, session.total_steps))

    def test_pause_holds_cursor(self):
        session = make_session()

        async def scenario():
            player = AutoPlayer(session, interval=0.01)
            player.start()
            await asyncio.sleep(0.035)
            player.pause()
            await asyncio.sleep(0.02)
            paused_at = session.cursor
            await asyncio.sleep(0.05)
            held = session.cursor == paused_at
            status = player.status
            player.resume()
            await player.wait()
            return held, status, player.status

        held, paused_status, final_status = asyncio.run(scenario())
        assert held
        assert paused_status == PlaybackStatus.PAUSED
        assert final_status == PlaybackStatus.FINISHED
        assert session.is_finished

    def test_cancel_leaves_trace_intact(self):
        session = make_session()
        before = session.trace.model_dump()

        async def scenario():
            player = AutoPlayer(session, interval=0.01)
            player.start()
            await asyncio.sleep(0.025)
            player.cancel()
            await player.wait()
            return player.status

        status = asyncio.run(scenario())
        assert status == PlaybackStatus.CANCELLED
        assert not session.is_finished
        assert session.trace.model_dump() == before

    def test_start_twice_rejected(self):
        session = make_session()

        async def scenario():
            player = AutoPlayer(session, interval=0.01)
            player.start()
            try:
                with pytest.raises(RuntimeError):
                    player.start()
            finally:
                player.cancel()
                await player.wait()

        asyncio.run(scenario())

    def test_finished_session_does_not_start(self):
        session = make_session("a:")
        while session.next_step() is not None:
            pass

        async def scenario():
            player = AutoPlayer(session, interval=0)
            player.start()
            await player.wait()
            return player.status

        assert asyncio.run(scenario()) == PlaybackStatus.FINISHED


class TestConfig:
    """Test playback configuration."""

    def test_defaults(self):
        assert CONFIG.step_interval == 0.8
        assert CONFIG.node_radius == 25.0

    def test_slider_inversion(self):
        config = configure()
        assert config.interval_from_slider(1300) == pytest.approx(0.8)
        assert config.interval_from_slider(2100) == pytest.approx(config.min_interval)
        assert config.interval_from_slider(0) == pytest.approx(config.max_interval)

    def test_step_interval_clamped(self):
        assert configure(step_interval=10).step_interval == 2.0

    def test_invalid_bounds(self):
        with pytest.raises(ValueError):
            configure(min_interval=1.0, max_interval=0.5)

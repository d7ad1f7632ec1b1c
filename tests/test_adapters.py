"""
Tests for process adapters — real subprocess pipelines and the mock.

The subprocess tests spawn small POSIX programs (printf, tr, cat, sh,
wc) and one program that does not exist, to exercise spawn failures.
"""

from setup_coding.adapters.mock import MockProcessAdapter
from setup_coding.adapters.shell.pipeline import SubprocessAdapter, split_chains
from setup_coding.core.models.step import ErrorKind, InputSource, Pipeline, Step

MISSING = "setup-coding-no-such-program"


def _capture(program: str, *args: str) -> Step:
    return Step(program=program, args=args, captures_output=True)


def _piped(program: str, *args: str, capture: bool = False) -> Step:
    return Step(
        program=program, args=args, input_source=InputSource.PIPE, captures_output=capture,
    )


# ── Chain splitting ─────────────────────────────────────────────────


class TestSplitChains:
    def test_groups_piped_steps(self):
        p = Pipeline(
            name="t",
            steps=[
                _capture("curl"), _piped("gpg"),
                _capture("echo", "x"), _piped("tee", "f"),
                Step(program="apt"),
            ],
        )
        chains = split_chains(p)
        assert [[s.program for s in c] for c in chains] == [
            ["curl", "gpg"], ["echo", "tee"], ["apt"],
        ]


# ── Subprocess Adapter Tests ────────────────────────────────────────


class TestSubprocessAdapter:
    def test_captures_single_step(self):
        result = SubprocessAdapter().run_pipeline(
            Pipeline(name="t", steps=[_capture("printf", "amd64\n")])
        )
        assert result.ok
        assert result.outcomes[0].captured == b"amd64\n"
        assert result.outcomes[0].exit_code == 0

    def test_pipes_between_processes(self):
        result = SubprocessAdapter().run_pipeline(
            Pipeline(
                name="t",
                steps=[_capture("printf", "hello"), _piped("tr", "a-z", "A-Z", capture=True)],
            )
        )
        assert result.ok
        # the producer's stream went to tr, not to us
        assert result.outcomes[0].captured is None
        assert result.outcomes[1].captured == b"HELLO"

    def test_streams_large_payload(self):
        result = SubprocessAdapter().run_pipeline(
            Pipeline(
                name="t",
                steps=[
                    _capture("sh", "-c", "head -c 1000000 /dev/zero"),
                    _piped("wc", "-c", capture=True),
                ],
            )
        )
        assert result.ok
        assert result.outcomes[1].captured.strip() == b"1000000"

    def test_stdin_none_reads_eof(self):
        step = Step(program="cat", input_source=InputSource.NONE, captures_output=True)
        result = SubprocessAdapter().run_pipeline(Pipeline(name="t", steps=[step]))
        assert result.ok
        assert result.outcomes[0].captured == b""

    def test_nonzero_exit_is_recorded(self):
        result = SubprocessAdapter().run_pipeline(
            Pipeline(name="t", steps=[Step(program="sh", args=("-c", "exit 3"))])
        )
        outcome = result.outcomes[0]
        assert not result.ok
        assert outcome.spawn_succeeded and outcome.waited
        assert outcome.exit_code == 3
        assert outcome.error_kind == ErrorKind.STEP_FAILURE

    def test_spawn_failure_skips_consumer_and_continues(self):
        result = SubprocessAdapter().run_pipeline(
            Pipeline(
                name="t",
                steps=[
                    _capture(MISSING),
                    _piped("tr", "a-z", "A-Z"),
                    _capture("printf", "after"),
                ],
            )
        )
        producer, consumer, after = result.outcomes
        assert producer.status == "failed"
        assert producer.error_kind == ErrorKind.SPAWN
        assert not producer.spawn_succeeded
        assert consumer.status == "skipped"
        assert consumer.error_kind == ErrorKind.UPSTREAM
        assert consumer.error == "missing upstream input"
        assert after.ok
        assert after.captured == b"after"

    def test_mid_chain_failure_skips_rest_of_chain(self):
        result = SubprocessAdapter().run_pipeline(
            Pipeline(
                name="t",
                steps=[
                    _capture("printf", "x"),
                    _piped(MISSING, capture=True),
                    _piped("cat", capture=True),
                ],
            )
        )
        programs = [o.step.program for o in result.outcomes]
        assert programs == ["printf", MISSING, "cat"]
        # the producer was still reaped
        assert result.outcomes[0].spawn_succeeded
        assert result.outcomes[0].waited
        assert result.outcomes[1].error_kind == ErrorKind.SPAWN
        assert result.outcomes[2].status == "skipped"

    def test_failed_step_does_not_stop_next_chain(self):
        result = SubprocessAdapter().run_pipeline(
            Pipeline(
                name="t",
                steps=[
                    Step(program="sh", args=("-c", "exit 1")),
                    _capture("printf", "still ran"),
                ],
            )
        )
        assert [o.status for o in result.outcomes] == ["failed", "ok"]
        assert result.outcomes[1].captured == b"still ran"

    def test_non_critical_failure(self):
        result = SubprocessAdapter().run_pipeline(
            Pipeline(
                name="t",
                steps=[Step(program="sh", args=("-c", "exit 1"), critical=False)],
            )
        )
        assert result.ok
        assert result.outcomes[0].status == "failed"


# ── Mock Adapter Tests ──────────────────────────────────────────────


class TestMockProcessAdapter:
    def test_default_success(self):
        mock = MockProcessAdapter()
        result = mock.run_pipeline(Pipeline(name="t", steps=[Step(program="git")]))
        assert result.ok
        assert mock.call_count == 1
        assert mock.commands() == ["git"]

    def test_output_by_program_and_command(self):
        mock = MockProcessAdapter()
        mock.set_output("uname", "fallback")
        mock.set_output("uname -m", "x86_64")
        result = mock.run_pipeline(
            Pipeline(name="t", steps=[_capture("uname", "-m"), _capture("uname", "-s")])
        )
        assert result.outcomes[0].captured == b"x86_64"
        assert result.outcomes[1].captured == b"fallback"

    def test_missing_program_skips_consumer(self):
        mock = MockProcessAdapter()
        mock.set_missing("curl")
        result = mock.run_pipeline(
            Pipeline(name="t", steps=[_capture("curl"), _piped("sh"), Step(program="apt")])
        )
        assert [o.status for o in result.outcomes] == ["failed", "skipped", "ok"]
        assert mock.commands() == ["apt"]

    def test_exit_code_and_unwaitable(self):
        mock = MockProcessAdapter()
        mock.set_exit_code("apt", 100)
        mock.set_unwaitable("gpg")
        result = mock.run_pipeline(
            Pipeline(name="t", steps=[Step(program="apt"), Step(program="gpg")])
        )
        assert result.outcomes[0].exit_code == 100
        assert result.outcomes[1].error_kind == ErrorKind.WAIT
        assert not result.outcomes[1].waited

    def test_reset(self):
        mock = MockProcessAdapter()
        mock.set_missing("git")
        mock.run_pipeline(Pipeline(name="t", steps=[Step(program="apt")]))
        mock.reset()
        assert mock.call_count == 0
        assert mock.pipelines == []
        assert mock.run_pipeline(Pipeline(name="t", steps=[Step(program="git")])).ok

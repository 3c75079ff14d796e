"""Tests for chronicle.versioning.diff module."""

import pytest

from chronicle.core.errors import NonPrefixDiffError
from chronicle.versioning import DiffEngine, TransformationLog, construct
from tests._support.hosts import birthday, eat, people


@pytest.fixture
def engine() -> DiffEngine:
    return DiffEngine()


class TestDifference:
    """The cut point is the length of the shorter history."""

    def test_newer_minus_older(self, engine, v1, v3):
        missing = engine.difference(v3, v1)
        assert isinstance(missing, TransformationLog)
        assert len(missing) == 2
        assert missing == [eat(), eat()]

    def test_argument_order_irrelevant(self, engine, v1, v3):
        assert engine.difference(v1, v3) == engine.difference(v3, v1)

    def test_equal_length_is_empty(self, engine, v1):
        assert engine.difference(v1, v1) == []

    def test_from_empty_history(self, engine, v0, v2):
        assert engine.difference(v2, v0) == v2.history

    def test_returns_exact_suffix_entries(self, engine, v0):
        older = v0.transform(eat(1))
        newer = older.transform(birthday()).transform(eat(3))
        assert engine.difference(newer, older) == [birthday(), eat(3)]

    def test_accepts_plain_sequences(self, engine):
        assert engine.difference([eat(), birthday()], [eat()]) == [birthday()]

    def test_rejects_other_inputs(self, engine):
        with pytest.raises(TypeError):
            engine.difference(42, [eat()])


class TestPrefixVerification:
    def test_diverging_histories_raise(self, engine, v0):
        fed = v0.transform(eat()).transform(eat())
        aged = v0.transform(birthday())

        with pytest.raises(NonPrefixDiffError) as exc_info:
            engine.difference(fed, aged)
        err = exc_info.value
        assert (err.shorter_length, err.longer_length, err.mismatch_index) == (1, 2, 0)

    def test_equal_length_divergence_raises(self, engine, v0):
        with pytest.raises(NonPrefixDiffError):
            engine.difference(v0.transform(eat()), v0.transform(birthday()))

    def test_verify_false_returns_positional_slice(self, engine, v0):
        fed = v0.transform(eat()).transform(eat(2))
        aged = v0.transform(birthday())
        assert engine.difference(fed, aged, verify=False) == [eat(2)]

    def test_engine_default(self, v0):
        engine = DiffEngine(verify_prefix=False)
        fed = v0.transform(eat()).transform(eat(2))
        aged = v0.transform(birthday())
        assert engine.difference(fed, aged) == [eat(2)]

    def test_settings_default(self, monkeypatch, v0):
        monkeypatch.setenv("CHRONICLE_VERIFY_DIFF_PREFIX", "false")
        fed = v0.transform(eat()).transform(eat(2))
        aged = v0.transform(birthday())
        assert DiffEngine().difference(fed, aged) == [eat(2)]

    def test_call_overrides_engine_default(self, v0):
        engine = DiffEngine(verify_prefix=False)
        fed = v0.transform(eat()).transform(eat())
        aged = v0.transform(birthday())
        with pytest.raises(NonPrefixDiffError):
            engine.difference(fed, aged, verify=True)

    def test_different_construction_args_not_checked(self, engine):
        """Only histories are compared; construction args are the caller's concern."""
        young = construct(people(), 20).transform(eat())
        old = construct(people(), 80).transform(eat()).transform(eat())
        assert engine.difference(old, young) == [eat()]

"""
Tests for chronicle.versioning.replay.

Tests verify:
- apply() clones immutable inputs and consumes mutable ones
- in-place and state-returning transformations
- rollback rebuilds from construction args
- host exceptions propagate unchanged
"""

import copy

import pytest

from chronicle.core.errors import EmptyHistoryError, InvalidTransformationError
from chronicle.versioning import (
    ReplayEngine,
    StateModel,
    VersionedValue,
    construct,
    construct_mutable,
    transform,
)
from tests._support.hosts import (
    Person,
    Subtract,
    birthday,
    counters,
    deposit,
    accounts,
    double,
    eat,
    increment,
    people,
    starve,
)


@pytest.fixture
def engine() -> ReplayEngine:
    return ReplayEngine()


class TestApply:
    def test_immutable_input_is_cloned(self, engine, v0):
        result = engine.apply(v0, [eat(), birthday()])

        assert isinstance(result, VersionedValue)
        assert (result.hunger, result.age) == (95, 21)
        assert result.history == [eat(), birthday()]
        assert (v0.hunger, v0.age, v0.version) == (100, 20, 0)

    def test_mutable_input_is_used_directly(self, engine):
        draft = construct_mutable(people(), 20)
        result = engine.apply(draft, [eat()])

        assert draft.history == [eat()]
        assert draft.hunger == 95
        assert result.hunger == 95

    def test_transformations_run_in_order(self, engine):
        result = engine.apply(construct(counters(), 3), [increment, double])
        assert result.state == 8

        result = engine.apply(construct(counters(), 3), [double, increment])
        assert result.state == 7

    def test_returned_state_replaces_old(self, engine):
        result = engine.apply(construct(counters(), 10), [Subtract(4)])
        assert result.state == 6

    def test_plain_callables_are_recorded(self, engine):
        result = engine.apply(construct(counters(), 1), [lambda n: n + 1])
        assert result.state == 2
        assert result.version == 1

    def test_pydantic_state(self, engine):
        start = construct(accounts(), {"owner": "ada"})
        result = engine.apply(start, [deposit(10), deposit(5)])
        assert result.balance == 15
        assert start.balance == 0

    def test_empty_list_still_freezes(self, engine):
        draft = construct_mutable(people(), 20)
        result = engine.apply(draft, [])
        assert isinstance(result, VersionedValue)
        assert result.version == 0

    def test_invalid_entry_fails_before_any_run(self, engine):
        draft = construct_mutable(people(), 20)
        with pytest.raises(InvalidTransformationError):
            engine.apply(draft, [eat(), 42])
        assert draft.history == []
        assert draft.hunger == 100


class TestStateCopies:
    """How often the state is copied on the way to a frozen result."""

    @pytest.fixture
    def copies(self):
        return []

    @pytest.fixture
    def model(self, copies):
        def counting_copy(person):
            copies.append(person)
            return copy.copy(person)

        return StateModel(Person, copy=counting_copy)

    def test_transform_copies_once(self, model, copies):
        v0 = construct(model, 20)
        v1 = transform(v0, eat())
        assert len(copies) == 1
        assert v1.state is not v0.state
        assert (v0.hunger, v1.hunger) == (100, 95)

    def test_derive_leaves_mutable_input_alone(self, engine, model, copies):
        draft = construct_mutable(model, 20)
        result = engine.derive(draft, [eat()])
        assert len(copies) == 1
        assert draft.history == []
        assert (draft.hunger, result.hunger) == (100, 95)

    def test_mutable_apply_detaches_result(self, engine, model, copies):
        draft = construct_mutable(model, 20)
        result = engine.apply(draft, [eat()])
        draft.hunger = 0
        assert len(copies) == 1
        assert result.hunger == 95

    def test_rebuild_copies_nothing(self, engine, model, copies):
        engine.rebuild(model, 20, [eat(), eat()])
        assert copies == []


class TestFailurePropagation:
    def test_host_exception_propagates_unchanged(self, engine, v1):
        with pytest.raises(RuntimeError, match="no food"):
            engine.apply(v1, [eat(), starve()])

    def test_immutable_input_unaffected_by_failure(self, engine, v1):
        with pytest.raises(RuntimeError):
            engine.apply(v1, [eat(), starve()])
        assert v1.hunger == 95
        assert v1.history == [eat()]


class TestRebuild:
    def test_rebuild(self, engine):
        result = engine.rebuild(people(), 30, [eat(), eat()])
        assert (result.age, result.hunger, result.version) == (30, 90, 2)

    def test_reconstruct_equals_original(self, engine, v3):
        rebuilt = engine.reconstruct(v3)
        assert rebuilt == v3
        assert rebuilt.hunger == v3.hunger
        assert rebuilt is not v3


class TestRollback:
    def test_one_step(self, engine, v0, v1):
        rolled = engine.rollback(v1)
        assert rolled == v0
        assert rolled.hunger == 100

    def test_multiple_steps(self, engine, v1, v3):
        rolled = engine.rollback(v3, steps=2)
        assert rolled == v1
        assert rolled.hunger == 95

    def test_all_steps(self, engine, v0, v3):
        assert engine.rollback(v3, steps=3) == v0

    def test_empty_history(self, engine, v0):
        with pytest.raises(EmptyHistoryError) as exc_info:
            engine.rollback(v0)
        assert exc_info.value.available == 0
        assert exc_info.value.context.operation == "rollback"

    def test_too_many_steps(self, engine, v2):
        with pytest.raises(EmptyHistoryError) as exc_info:
            engine.rollback(v2, steps=3)
        assert exc_info.value.requested == 3
        assert exc_info.value.available == 2

    def test_invalid_steps(self, engine, v1):
        with pytest.raises(ValueError):
            engine.rollback(v1, steps=0)

    def test_rebuilds_from_scratch(self, engine):
        """State written directly on a builder is not carried into a rollback."""
        draft = construct_mutable(people(), 20)
        draft.age = 99
        published = engine.apply(draft, [eat()])
        assert published.age == 99

        rolled = engine.rollback(published)
        assert rolled.age == 20
        assert rolled.hunger == 100

    def test_mutable_input_untouched(self, engine):
        draft = construct_mutable(people(), 20)
        draft.history.append(eat())
        engine.rollback(draft)
        assert draft.history == [eat()]

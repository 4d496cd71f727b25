import pytest

import typetone.policy

from typetone.timebase import Duration


def test_duration_steps () -> None:

	"""Longer units get shorter durations, one step per extra member."""

	policy = typetone.policy.DurationPolicy()

	assert policy.duration_for(1) == Duration.WHOLE
	assert policy.duration_for(2) == Duration.HALF
	assert policy.duration_for(3) == Duration.QUARTER
	assert policy.duration_for(4) == Duration.EIGHTH
	assert policy.duration_for(5) == Duration.SIXTEENTH
	assert policy.duration_for(6) == Duration.THIRTY_SECOND


def test_duration_clamps_past_ceiling () -> None:

	"""Lengths beyond the ceiling stay at the shortest duration."""

	policy = typetone.policy.DurationPolicy()

	assert policy.ceiling == 6
	assert policy.duration_for(7) == Duration.THIRTY_SECOND
	assert policy.duration_for(100) == Duration.THIRTY_SECOND


def test_duration_is_monotonic () -> None:

	"""No unit is ever longer than a shorter unit."""

	policy = typetone.policy.DurationPolicy()
	beats = [policy.duration_for(n).beats for n in range(1, 12)]

	assert beats == sorted(beats, reverse=True)


def test_duration_rejects_empty_units () -> None:

	"""A unit must contain at least one member."""

	with pytest.raises(ValueError):
		typetone.policy.DurationPolicy().duration_for(0)


def test_custom_duration_steps () -> None:

	"""Injected step tables replace the default one."""

	policy = typetone.policy.DurationPolicy([Duration.QUARTER, Duration.EIGHTH])

	assert policy.duration_for(1) == Duration.QUARTER
	assert policy.duration_for(5) == Duration.EIGHTH
	assert policy.durations() == {Duration.QUARTER, Duration.EIGHTH}


def test_invalid_duration_steps () -> None:

	"""Step tables must be non-empty and never lengthen."""

	with pytest.raises(ValueError):
		typetone.policy.DurationPolicy([])

	with pytest.raises(ValueError):
		typetone.policy.DurationPolicy([Duration.EIGHTH, Duration.HALF])


def test_standard_rests () -> None:

	"""Dash is the longest rest, exclamation mark the shortest."""

	rests = typetone.policy.RestPolicy()

	assert rests.rest_for("-") == Duration.HALF
	assert rests.rest_for("–") == Duration.HALF
	assert rests.rest_for("—") == Duration.HALF
	assert rests.rest_for(".") == Duration.QUARTER
	assert rests.rest_for("&") == Duration.EIGHTH
	assert rests.rest_for("?") == Duration.SIXTEENTH
	assert rests.rest_for("!") == Duration.THIRTY_SECOND


def test_non_rests () -> None:

	"""Letters and unlisted symbols are not rests."""

	rests = typetone.policy.RestPolicy()

	for char in "a/'#,":
		assert rests.rest_for(char) is None


def test_extended_rests () -> None:

	"""The extended table keeps the standard rests and adds more symbols."""

	rests = typetone.policy.RestPolicy.extended()

	assert rests.rest_for(".") == Duration.QUARTER
	assert rests.rest_for("/") == Duration.HALF
	assert rests.rest_for("%") == Duration.QUARTER
	assert rests.rest_for("#") == Duration.EIGHTH
	assert rests.rest_for("+") == Duration.SIXTEENTH
	assert rests.rest_for("^") == Duration.THIRTY_SECOND


def test_named_rest_tables () -> None:

	"""Rest tables can be picked by name, as the config file does."""

	assert "/" in typetone.policy.RestPolicy.named("extended")
	assert "/" not in typetone.policy.RestPolicy.named("standard")

	with pytest.raises(ValueError, match="Unknown rest table"):
		typetone.policy.RestPolicy.named("baroque")

import pytest

import typetone.events
import typetone.notation
import typetone.pitch
import typetone.policy

from typetone.events import Chord, Note, Rest
from typetone.timebase import Duration


def _pitch (char: str) -> typetone.pitch.Pitch:

	pitch = typetone.pitch.resolve(char)
	assert pitch is not None
	return pitch


def test_tokenize_words_and_groups () -> None:

	"""Words and chord groups come out in order."""

	compiler = typetone.notation.NotationCompiler()

	assert compiler._tokenize("a b c") == ["a", "b", "c"]
	assert compiler._tokenize("a (b c) d") == ["a", ["b", "c"], "d"]
	assert compiler._tokenize("x(ab cd)y") == ["x", ["ab", "cd"], "y"]
	assert compiler._tokenize("  cat\t\ndog  ") == ["cat", "dog"]


def test_tokenize_does_not_nest () -> None:

	"""Inner open markers and stray close markers are ordinary characters."""

	compiler = typetone.notation.NotationCompiler()

	assert compiler._tokenize("(a (b c) d)") == [["a", "(b", "c"], "d)"]
	assert compiler._tokenize("a) b") == ["a)", "b"]


def test_tokenize_unterminated_group (caplog: pytest.LogCaptureFixture) -> None:

	"""An open group at end of input is closed with a warning."""

	compiler = typetone.notation.NotationCompiler()

	assert compiler._tokenize("a (b c") == ["a", ["b", "c"]]
	assert "Unterminated chord group" in caplog.text


def test_single_letter_is_whole_note () -> None:

	"""Every one-letter word is one whole note."""

	for letter in "abcdefghijklmnopqrstuvwxyz":
		events = typetone.notation.compile(letter)
		assert events == (Note(_pitch(letter), Duration.WHOLE, 0.5),)


def test_whitespace_only () -> None:

	"""Whitespace alone compiles to nothing."""

	assert typetone.notation.compile("") == ()
	assert typetone.notation.compile("   \t\n ") == ()


def test_cat () -> None:

	"""Three letters, three quarter notes, left to right."""

	events = typetone.notation.compile("cat")

	assert events == (
		Note(_pitch("c"), Duration.QUARTER, 0.5),
		Note(_pitch("a"), Duration.QUARTER, 0.5),
		Note(_pitch("t"), Duration.QUARTER, 0.5),
	)
	assert [event.pitch.midi for event in events] == [52, 60, 79]


def test_punctuation_inside_word () -> None:

	"""Punctuation is a rest and does not count towards the word length."""

	events = typetone.notation.compile("a.b")

	assert events == (
		Note(_pitch("a"), Duration.HALF, 0.5),
		Rest(Duration.QUARTER),
		Note(_pitch("b"), Duration.HALF, 0.5),
	)


def test_punctuation_only_word () -> None:

	"""A word of rests yields only rests."""

	events = typetone.notation.compile("-.&?!")

	assert events == (
		Rest(Duration.HALF),
		Rest(Duration.QUARTER),
		Rest(Duration.EIGHTH),
		Rest(Duration.SIXTEENTH),
		Rest(Duration.THIRTY_SECOND),
	)


def test_accidentals () -> None:

	"""Trailing markers shift the letter before them and are consumed."""

	events = typetone.notation.compile("a'b,")

	assert len(events) == 2
	assert events[0].pitch.midi == 61
	assert events[0].pitch.name == "C#4"
	assert events[1].pitch.midi == 54
	assert events[0].duration == Duration.HALF


def test_stray_accidental_is_skipped () -> None:

	"""A marker that does not follow a letter makes no event."""

	events = typetone.notation.compile("' ,a ''")

	assert events == (Note(_pitch("a"), Duration.WHOLE, 0.5),)


def test_only_one_accidental_consumed () -> None:

	"""A second marker is an unresolvable character."""

	events = typetone.notation.compile("a''")

	assert len(events) == 1
	assert events[0].pitch.midi == 61


def test_unknown_characters_are_skipped () -> None:

	"""Digits and symbols outside the tables neither sound nor count."""

	events = typetone.notation.compile("c4a#t")

	assert [event.pitch for event in events] == [_pitch("c"), _pitch("a"), _pitch("t")]
	assert all(event.duration == Duration.QUARTER for event in events)


def test_case_dynamics () -> None:

	"""Uppercase letters are accented."""

	events = typetone.notation.compile("Ab")

	assert events[0].velocity == 1.0
	assert events[1].velocity == 0.5
	assert events[0].pitch.midi == 60


def test_fixed_velocity_without_case_dynamics () -> None:

	"""With case dynamics off every note gets the default velocity."""

	compiler = typetone.notation.NotationCompiler(grammar=typetone.notation.Grammar(case_dynamics=False))

	events = compiler.compile("Ab")

	assert [event.velocity for event in events] == [0.8, 0.8]


def test_chord_group () -> None:

	"""Each member word is one chord; all share the group-size duration."""

	events = typetone.notation.compile("(cat dog)")

	assert events == (
		Chord((_pitch("c"), _pitch("a"), _pitch("t")), Duration.HALF, 0.5),
		Chord((_pitch("d"), _pitch("o"), _pitch("g")), Duration.HALF, 0.5),
	)


def test_chord_duration_ignores_member_length () -> None:

	"""A one-member group is a whole-note chord however long the word."""

	events = typetone.notation.compile("(qwertyuiop)")

	assert len(events) == 1
	assert events[0].duration == Duration.WHOLE
	assert len(events[0].pitches) == 10


def test_chord_group_with_punctuation () -> None:

	"""Punctuation splits a member into chords and adds its own rest."""

	events = typetone.notation.compile("(ca.t do!g x)")

	shared = Duration.QUARTER

	assert events == (
		Chord((_pitch("c"), _pitch("a")), shared, 0.5),
		Rest(Duration.QUARTER),
		Chord((_pitch("t"),), shared, 0.5),
		Chord((_pitch("d"), _pitch("o")), shared, 0.5),
		Rest(Duration.THIRTY_SECOND),
		Chord((_pitch("g"),), shared, 0.5),
		Chord((_pitch("x"),), shared, 0.5),
	)


def test_chord_member_without_pitches () -> None:

	"""A member of rests counts towards the size but makes no chord."""

	events = typetone.notation.compile("(ab . cd)")

	assert [type(event) for event in events] == [Chord, Rest, Chord]
	assert events[0].duration == Duration.QUARTER
	assert events[2].duration == Duration.QUARTER


def test_chord_strikes_each_note_once () -> None:

	"""Repeated letters, and letters sharing a note, collapse into one pitch."""

	assert typetone.notation.compile("(aa)") == (Chord((_pitch("a"),), Duration.WHOLE, 0.5),)

	# k and q are both C5.
	assert typetone.notation.compile("(kq)") == (Chord((_pitch("k"),), Duration.WHOLE, 0.5),)

	events = typetone.notation.compile("(aqaS)")

	assert events[0].pitches == (_pitch("a"), _pitch("q"), _pitch("s"))
	assert events[0].velocity == 1.0


def test_chord_accidentals_and_velocity () -> None:

	"""Markers work inside groups; one capital accents the chord."""

	events = typetone.notation.compile("(aE')")

	assert events[0].pitches == (_pitch("a"), _pitch("e").shifted(1))
	assert events[0].velocity == 1.0


def test_empty_group () -> None:

	"""An empty group makes no events."""

	assert typetone.notation.compile("() a") == (Note(_pitch("a"), Duration.WHOLE, 0.5),)


def test_unterminated_group_is_flushed () -> None:

	"""End of input inside a group compiles the members collected so far."""

	events = typetone.notation.compile("(cat dog")

	assert events == typetone.notation.compile("(cat dog)")


def test_mixed_passage () -> None:

	"""Words, groups and rests compile in reading order."""

	events = typetone.notation.compile("hi (qe ad) - z")

	kinds = [type(event) for event in events]

	assert kinds == [Note, Note, Chord, Chord, Rest, Note]
	assert events[0].duration == Duration.HALF
	assert events[2].duration == Duration.HALF
	assert events[4].duration == Duration.HALF
	assert events[5].duration == Duration.WHOLE


def test_compile_is_deterministic () -> None:

	"""Compiling the same text twice gives equal sequences."""

	text = "(Cat dog') a.b - Zebra!"

	assert typetone.notation.compile(text) == typetone.notation.compile(text)


def test_sequence_is_immutable () -> None:

	"""Compiled sequences are tuples of frozen events."""

	events = typetone.notation.compile("cat")

	assert isinstance(events, tuple)

	with pytest.raises(AttributeError):
		events[0].velocity = 1.0  # type: ignore[misc]


def test_all_durations_positive () -> None:

	"""Every event of a long passage has a positive length and chords are non-empty."""

	events = typetone.notation.compile("The quick, brown fox! (jumps over) the lazy - dog? & (a b c d e f g)")

	for event in events:
		assert event.duration.beats > 0
		if isinstance(event, Chord):
			assert event.pitches


def test_alternate_raise_marker () -> None:

	"""The raise marker can be swapped for a variant grammar."""

	compiler = typetone.notation.NotationCompiler(grammar=typetone.notation.Grammar(raise_marker='"'))

	events = compiler.compile('a"')

	assert events[0].pitch.midi == 61

	assert typetone.notation.compile('a"')[0].pitch.midi == 60


def test_custom_tables () -> None:

	"""Injected policies drive durations and rests."""

	compiler = typetone.notation.NotationCompiler(
		duration_policy = typetone.policy.DurationPolicy([Duration.QUARTER]),
		rest_policy = typetone.policy.RestPolicy.extended()
	)

	events = compiler.compile("ab/c")

	assert events == (
		Note(_pitch("a"), Duration.QUARTER, 0.5),
		Note(_pitch("b"), Duration.QUARTER, 0.5),
		Rest(Duration.HALF),
		Note(_pitch("c"), Duration.QUARTER, 0.5),
	)


def test_marker_clashing_with_rest_is_rejected () -> None:

	"""A marker cannot also be a rest character."""

	with pytest.raises(ValueError, match="rest character"):
		typetone.notation.NotationCompiler(
			grammar = typetone.notation.Grammar(raise_marker='"'),
			rest_policy = typetone.policy.RestPolicy.extended()
		)


def test_invalid_grammar () -> None:

	"""Markers must be single, distinct, non-space characters."""

	with pytest.raises(ValueError):
		typetone.notation.Grammar(open_group="((")

	with pytest.raises(ValueError):
		typetone.notation.Grammar(raise_marker=",")

	with pytest.raises(ValueError):
		typetone.notation.Grammar(lower_marker=" ")

	with pytest.raises(ValueError):
		typetone.notation.Grammar(accent_velocity=1.5)

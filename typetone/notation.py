import dataclasses
import enum
import logging
import typing

import typetone.constants.velocity
import typetone.events
import typetone.pitch
import typetone.policy
import typetone.timebase


logger = logging.getLogger(__name__)


@dataclasses.dataclass (frozen=True)
class Grammar:

	"""
	The marker characters and dynamics rules of the notation.

	The canonical grammar raises a letter with a trailing ``'`` and lowers it
	with a trailing ``,``. Other variants are built by overriding fields, e.g.
	``Grammar(raise_marker='"')``.
	"""

	open_group: str = "("
	close_group: str = ")"
	raise_marker: str = "'"
	lower_marker: str = ","
	case_dynamics: bool = True
	accent_velocity: float = typetone.constants.velocity.ACCENT_VELOCITY
	soft_velocity: float = typetone.constants.velocity.SOFT_VELOCITY
	default_velocity: float = typetone.constants.velocity.DEFAULT_VELOCITY

	def __post_init__ (self) -> None:

		markers = self.markers()

		for marker in markers:
			if len(marker) != 1 or marker.isspace():
				raise ValueError(f"Grammar markers must be single non-space characters, got {marker!r}")

		if len(set(markers)) != len(markers):
			raise ValueError(f"Grammar markers must be distinct, got {markers!r}")

		for velocity in (self.accent_velocity, self.soft_velocity, self.default_velocity):
			if not 0.0 <= velocity <= 1.0:
				raise ValueError(f"Velocities are normalised to 0.0-1.0, got {velocity!r}")

	def markers (self) -> typing.Tuple[str, ...]:

		"""Every character with a structural meaning in this grammar."""

		return (self.open_group, self.close_group, self.raise_marker, self.lower_marker)


class _State (enum.Enum):

	SCANNING = "scanning"
	IN_CHORD_GROUP = "in_chord_group"


class _Struck (typing.NamedTuple):

	"""A resolved pitch and the velocity its letter case asked for."""

	pitch: typetone.pitch.Pitch
	velocity: float


Token = typing.Union[str, typing.List[str]]


class NotationCompiler:

	"""
	Compiles a notation string into an event sequence.

	**Syntax:**
	- `cat`: Each letter is a note. All notes of a word share one duration,
	  taken from the duration policy by the number of letters in the word.
	- `c'` / `c,`: A trailing accidental marker raises or lowers the letter
	  before it by a semitone.
	- `C` vs `c`: Uppercase letters are accented (when case dynamics are on).
	- `- . & ? !`: Punctuation is a rest of a fixed length.
	- `(cat dog)`: A chord group. Each member word becomes one chord; all of
	  them share a duration taken from the number of members.

	Everything else is skipped without error.
	"""

	def __init__ (
		self,
		grammar: typing.Optional[Grammar] = None,
		resolver: typing.Optional[typetone.pitch.PitchResolver] = None,
		duration_policy: typing.Optional[typetone.policy.DurationPolicy] = None,
		rest_policy: typing.Optional[typetone.policy.RestPolicy] = None
	) -> None:

		"""Assemble a compiler from its tables.

		Parameters:
			grammar: Marker characters and dynamics (default: canonical grammar).
			resolver: Character-to-pitch lookup (default: QWERTY keyboard table).
			duration_policy: Unit length to duration (default: whole down to thirty-second).
			rest_policy: Punctuation to rest duration (default: standard table).

		Raises:
			ValueError: If a grammar marker is also a rest or a pitch character.
		"""

		self.grammar = grammar if grammar is not None else Grammar()
		self.resolver = resolver if resolver is not None else typetone.pitch.PitchResolver()
		self.duration_policy = duration_policy if duration_policy is not None else typetone.policy.DurationPolicy()
		self.rest_policy = rest_policy if rest_policy is not None else typetone.policy.RestPolicy()

		for marker in self.grammar.markers():

			if marker in self.rest_policy:
				raise ValueError(f"Marker {marker!r} is also a rest character")

			if marker in self.resolver:
				raise ValueError(f"Marker {marker!r} is also a pitch character")


	def compile (self, text: str) -> typetone.events.EventSequence:

		"""
		Compile ``text`` into a new, immutable event sequence.

		Example:
			```python
			compiler = NotationCompiler()

			# Three quarter notes: E3, C4, G5
			compiler.compile("cat")

			# Two chords sharing a half-note duration
			compiler.compile("(cat dog)")
			```
		"""

		events: typing.List[typetone.events.Event] = []

		for token in self._tokenize(text):

			if isinstance(token, list):
				events.extend(self._compile_chord_group(token))
			else:
				events.extend(self._compile_word(token))

		logger.debug(f"Compiled {len(text)} characters into {len(events)} events")

		return tuple(events)


	def _tokenize (self, text: str) -> typing.List[Token]:

		"""
		Split text into words and chord groups.
		"a (b c) d" -> ["a", ["b", "c"], "d"]

		Groups do not nest: inside a group an open marker is an ordinary
		character, and so is a close marker outside one.
		"""

		tokens: typing.List[Token] = []
		members: typing.List[str] = []
		current: typing.List[str] = []
		state = _State.SCANNING

		def end_word () -> None:

			if not current:
				return

			word = "".join(current)
			current.clear()

			if state is _State.IN_CHORD_GROUP:
				members.append(word)
			else:
				tokens.append(word)

		for char in text:

			if state is _State.SCANNING and char == self.grammar.open_group:
				end_word()
				state = _State.IN_CHORD_GROUP

			elif state is _State.IN_CHORD_GROUP and char == self.grammar.close_group:
				end_word()
				tokens.append(list(members))
				members.clear()
				state = _State.SCANNING

			elif char.isspace():
				end_word()

			else:
				current.append(char)

		end_word()

		if state is _State.IN_CHORD_GROUP:
			logger.warning(f"Unterminated chord group at end of input, closing it after {len(members)} members")
			tokens.append(list(members))

		return tokens


	def _scan (self, word: str) -> typing.Iterator[typing.Union[typetone.events.Rest, _Struck]]:

		"""
		Walk a word left to right, yielding rests and resolved pitches.

		Rests are checked before pitches so punctuation never resolves as a
		note. An accidental marker directly after a resolved letter is
		consumed with it.
		"""

		i = 0

		while i < len(word):

			char = word[i]
			i += 1

			rest = self.rest_policy.rest_for(char)

			if rest is not None:
				yield typetone.events.Rest(duration=rest)
				continue

			pitch = self.resolver.resolve(char)

			if pitch is None:
				logger.debug(f"Skipping unresolvable character {char!r}")
				continue

			following = word[i] if i < len(word) else ""

			if following == self.grammar.raise_marker:
				pitch = pitch.shifted(1)
				i += 1

			elif following == self.grammar.lower_marker:
				pitch = pitch.shifted(-1)
				i += 1

			yield _Struck(pitch, self._velocity(char))


	def _velocity (self, char: str) -> float:

		if not self.grammar.case_dynamics:
			return self.grammar.default_velocity

		if char.isupper():
			return self.grammar.accent_velocity

		return self.grammar.soft_velocity


	def _compile_word (self, word: str) -> typing.List[typetone.events.Event]:

		"""
		One note per letter, all sharing the duration for the word's letter count.
		"""

		scanned = list(self._scan(word))
		letter_count = sum(1 for item in scanned if isinstance(item, _Struck))

		if letter_count == 0:
			return [item for item in scanned if isinstance(item, typetone.events.Rest)]

		duration = self.duration_policy.duration_for(letter_count)
		events: typing.List[typetone.events.Event] = []

		for item in scanned:

			if isinstance(item, _Struck):
				events.append(typetone.events.Note(pitch=item.pitch, duration=duration, velocity=item.velocity))
			else:
				events.append(item)

		return events


	def _compile_chord_group (self, members: typing.List[str]) -> typing.List[typetone.events.Event]:

		"""
		One chord per member word, all sharing the duration for the member count.

		Punctuation inside a member closes the chord built so far and adds a
		rest of its own (rest policy) length.
		"""

		if not members:
			return []

		duration = self.duration_policy.duration_for(len(members))
		events: typing.List[typetone.events.Event] = []

		for member in members:

			pending: typing.List[_Struck] = []

			for item in self._scan(member):

				if isinstance(item, typetone.events.Rest):
					if pending:
						events.append(self._chord(pending, duration))
						pending = []
					events.append(item)

				else:
					pending.append(item)

			if pending:
				events.append(self._chord(pending, duration))

		return events


	def _chord (self, struck: typing.List[_Struck], duration: typetone.timebase.Duration) -> typetone.events.Chord:

		# Letters landing on the same MIDI note strike it once, at its first position.
		pitches: typing.Dict[int, typetone.pitch.Pitch] = {}

		for item in struck:
			pitches.setdefault(item.pitch.midi, item.pitch)

		return typetone.events.Chord(
			pitches = tuple(pitches.values()),
			duration = duration,
			velocity = max(item.velocity for item in struck)
		)


_DEFAULT_COMPILER = NotationCompiler()


def compile (text: str, compiler: typing.Optional[NotationCompiler] = None) -> typetone.events.EventSequence:

	"""
	Compile a notation string with the canonical grammar and tables.

	Parameters:
		text: The notation string.
		compiler: Use a configured compiler instead of the default one.

	Returns:
		A tuple of `Rest`, `Note` and `Chord` events in performance order.
	"""

	return (compiler or _DEFAULT_COMPILER).compile(text)

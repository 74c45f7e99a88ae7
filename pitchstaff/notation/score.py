"""Static score content - notes, timed notes and sheet music.

Notes carry no position or timing of their own; both are derived from a
MusicContext whenever they are needed.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Tuple

from ..core import Accidental, NoteName, NoteDuration
from ..core.constants import (
    DEFAULT_KEY_SIGNATURE,
    DEFAULT_REFERENCE_FREQUENCY,
    DEFAULT_TIME_SIGNATURE,
)
from ..analysis.pitch import NoteLike, to_note_name, pitch_number_to_frequency
from .clef import ledger_line_count
from .context import MusicContext
from .staff import note_name_to_staff_position, accidental_for_display


@dataclass(frozen=True)
class Note:
    """A written note: name and duration class."""

    name: NoteName
    duration: NoteDuration = NoteDuration.QUARTER
    reference_frequency: float = DEFAULT_REFERENCE_FREQUENCY
    key_signature: str = DEFAULT_KEY_SIGNATURE

    def __post_init__(self):
        if not isinstance(self.name, NoteName):
            object.__setattr__(self, "name", to_note_name(self.name))

    @property
    def pitch_number(self) -> int:
        return self.name.pitch_number

    @property
    def frequency(self) -> float:
        """Frequency (Hz) at this note's reference tuning."""
        return pitch_number_to_frequency(self.pitch_number, self.reference_frequency)

    @classmethod
    def whole(cls, name: NoteLike, **kwargs) -> "Note":
        return cls(to_note_name(name), NoteDuration.WHOLE, **kwargs)

    @classmethod
    def half(cls, name: NoteLike, **kwargs) -> "Note":
        return cls(to_note_name(name), NoteDuration.HALF, **kwargs)

    @classmethod
    def quarter(cls, name: NoteLike, **kwargs) -> "Note":
        return cls(to_note_name(name), NoteDuration.QUARTER, **kwargs)

    @classmethod
    def eighth(cls, name: NoteLike, **kwargs) -> "Note":
        return cls(to_note_name(name), NoteDuration.EIGHTH, **kwargs)

    @classmethod
    def sixteenth(cls, name: NoteLike, **kwargs) -> "Note":
        return cls(to_note_name(name), NoteDuration.SIXTEENTH, **kwargs)


@dataclass(frozen=True)
class TimedNote:
    """A note placed at a start time (seconds) within a piece."""

    note: Note
    start_time: float

    def duration(self, context: MusicContext) -> float:
        """Duration in seconds at the context's tempo."""
        return self.note.duration.seconds(context.tempo)

    def end_time(self, context: MusicContext) -> float:
        return self.start_time + self.duration(context)

    def staff_position(self, context: MusicContext) -> float:
        return note_name_to_staff_position(self.note.name, context)

    def accidental_display(self, context: MusicContext) -> Accidental:
        return accidental_for_display(self.note.name, context.key_signature)

    def ledger_lines(self, context: MusicContext) -> int:
        return ledger_line_count(self.staff_position(context))


@dataclass
class SheetMusic:
    """A piece of music: metadata, context and timed notes."""

    title: str
    composer: str
    context: MusicContext = field(default_factory=MusicContext)
    time_signature: str = DEFAULT_TIME_SIGNATURE
    timed_notes: List[TimedNote] = field(default_factory=list)

    @classmethod
    def from_notes(
        cls,
        title: str,
        composer: str,
        notes: Iterable[Tuple[NoteLike, NoteDuration]],
        context: MusicContext = None,
        time_signature: str = DEFAULT_TIME_SIGNATURE,
    ) -> "SheetMusic":
        """
        Lay out an ordered (note name, duration) sequence end to end.

        Args:
            title: Piece title
            composer: Composer
            notes: Ordered (note name, duration class) pairs
            context: Music context (default: C major, treble, 120 BPM)
            time_signature: Time signature label

        Returns:
            SheetMusic with start times derived from the context tempo
        """
        context = context if context is not None else MusicContext()
        timed = []
        time = 0.0
        for name, duration in notes:
            note = Note(
                to_note_name(name),
                duration,
                reference_frequency=context.reference_frequency,
                key_signature=context.key_signature,
            )
            timed.append(TimedNote(note=note, start_time=time))
            time += duration.seconds(context.tempo)
        return cls(title, composer, context, time_signature, timed)

    @property
    def total_duration(self) -> float:
        """End time of the last sounding note (seconds)."""
        if not self.timed_notes:
            return 0.0
        return max(tn.end_time(self.context) for tn in self.timed_notes)

    def notes_at(self, time: float) -> List[TimedNote]:
        """Notes sounding at a given time (start and end inclusive)."""
        return [
            tn for tn in self.timed_notes
            if tn.start_time <= time <= tn.end_time(self.context)
        ]

    def notes_up_to(self, time: float) -> List[TimedNote]:
        """Notes that start at or before a given time."""
        return [tn for tn in self.timed_notes if tn.start_time <= time]

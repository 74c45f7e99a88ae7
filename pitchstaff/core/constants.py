"""Global constants for pitchstaff."""

# Pitch names (canonical sharp spelling)
PITCH_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Letter order within an octave
LETTERS = ["C", "D", "E", "F", "G", "A", "B"]

# Pitch class of each natural letter
LETTER_PITCH_CLASS = {"C": 0, "D": 2, "E": 4, "F": 5, "G": 7, "A": 9, "B": 11}

# Tuning defaults
DEFAULT_REFERENCE_FREQUENCY = 440.0  # A4
DEFAULT_REFERENCE_PITCH = 69  # MIDI number of A4

# Musical defaults
DEFAULT_TEMPO = 120.0
DEFAULT_KEY_SIGNATURE = "C major"
DEFAULT_TIME_SIGNATURE = "4/4"

SEMITONES_PER_OCTAVE = 12
DIATONIC_STEPS_PER_OCTAVE = 7

# Staff geometry in staff-position units (one unit = one diatonic step)
STAFF_HALF_HEIGHT = 4.0  # outer lines sit at -4 and +4
LEDGER_LINE_STEP = 2.0

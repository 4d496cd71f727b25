import logging

import typetone

logging.basicConfig(level=logging.INFO)

# Home-row melody, an accented chord pair, a quarter rest, then a run of
# thirty-second notes (six letters or more).
melody = typetone.Melody("Dash sad gaff. (QET adg) - qwerty!", bpm=96)

if __name__ == "__main__":
	print("Press Ctrl+C to stop.")
	melody.play()

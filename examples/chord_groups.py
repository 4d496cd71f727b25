import asyncio
import logging

import typetone
import typetone.engine

logging.basicConfig(level=logging.INFO)

# Each group member is one chord; the group size sets the shared length.
verse = typetone.Melody("(adg) (sfh jl) (adg dgj qet)", bpm=80)
chorus = typetone.Melody("(QET) wry (QET)", bpm=80)


async def main () -> None:

	engine = typetone.engine.MidiSoundEngine()

	try:
		await verse.play_async(engine)
		await asyncio.sleep(3)

		# Starting the chorus cuts the verse off; the two never overlap.
		await chorus.play_async(engine)
		await engine.wait()

	finally:
		await engine.close()


if __name__ == "__main__":
	asyncio.run(main())

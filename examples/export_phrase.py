import logging

import typetone
import typetone.config
import typetone.events

logging.basicConfig(level=logging.INFO)

# Same text, two grammars: the extended rest table turns '/' into a half rest.
settings = typetone.config.Settings.from_dict({"notation": {"rests": "extended"}})

melody = typetone.Melody("Ha'ppy / (days are) here, a'gain", bpm=110, compiler=settings.compiler(), track_name="happy")

if __name__ == "__main__":
	for event in melody.events:
		print(typetone.events.describe(event))

	melody.save("happy.mid")

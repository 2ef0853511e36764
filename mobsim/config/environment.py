"""Environment cycle constants (day/night, weather, seasons)."""

# Time of day: Day at multiples of DAY_PERIOD, otherwise Night at multiples
# of NIGHT_PERIOD. Steps matching neither keep the previous value.
DAY_PERIOD = 300  # steps
NIGHT_PERIOD = 100  # steps

# Weather changes to a different random value every WEATHER_PERIOD steps
WEATHER_PERIOD = 150  # steps

# Season advances Summer -> Autumn -> Winter -> Spring every SEASON_PERIOD steps
SEASON_PERIOD = 200  # steps

# Disease is more likely to break out in winter
WINTER_DISEASE_MULTIPLIER = 2.0

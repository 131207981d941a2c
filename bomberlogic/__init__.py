"""Game logic for a grid-based bomb-laying arcade game: bombers, bombs, explosions, power-ups, computer opponents and a software audio mixer."""

__version__ = "0.1.0"
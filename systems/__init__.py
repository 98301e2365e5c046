"""Game logic shared by the front ends: clock, spawning, simulation, scoring."""

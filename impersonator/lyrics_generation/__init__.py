"""
Lyrics generation module.

Accepts an artist, a song and a mood description, pulls the song's
original lyrics from Genius as style context, and asks an
OpenRouter-hosted model for a new, original set of lyrics.
"""

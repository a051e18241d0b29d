"""Pygame front end: window, input translation and drawing."""

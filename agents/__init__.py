"""Scripted agents for the bubble dodge environment."""

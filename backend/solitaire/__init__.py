"""Mahjong Solitaire board service."""

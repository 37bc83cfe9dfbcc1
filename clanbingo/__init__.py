"""Clan bingo activity matching engine."""

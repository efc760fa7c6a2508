"""Vocabulary flashcard trainer."""

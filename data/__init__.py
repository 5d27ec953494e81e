"""Synthetic athlete generation."""

from .synthetic import (
    ARCHETYPES,
    create_archetype,
    generate_athlete_profiles,
)

__all__ = [
    'ARCHETYPES',
    'create_archetype',
    'generate_athlete_profiles',
]

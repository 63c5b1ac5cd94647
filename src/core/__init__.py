"""Modèle des membres de salons IRC (identité, rôles, salons)."""

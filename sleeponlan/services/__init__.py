"""Packet validation, receive loop and the collaborators it drives."""

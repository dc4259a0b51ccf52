"""prowlstream — Prowlarr search exposed as normalized stream results."""

__version__ = "0.1.0"

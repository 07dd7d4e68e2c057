"""Infrastructure layer: storage backends (memory, postgres) and security helpers."""

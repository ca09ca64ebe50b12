"""Built-in CLI commands: ``init``, ``config`` and the resource commands."""

"""Business services. Each takes a ``Storage`` and never touches HTTP."""

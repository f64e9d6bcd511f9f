"""Errors raised by callbatch."""


class InvalidArgument(TypeError, ValueError):
    """A batcher was constructed with a bad sink, interval or limit."""

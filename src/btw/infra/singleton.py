import functools


def singleton(func):
    """
    Decorator for a zero-argument factory function.
    Caches the first return value in func._instance
    and always returns that thereafter.
    Delete ``func._instance`` to force a rebuild.
    """

    @functools.wraps(func)
    def wrapper():
        if not hasattr(func, "_instance"):
            func._instance = func()
        return func._instance

    wrapper.reset = lambda: func.__dict__.pop("_instance", None)
    return wrapper

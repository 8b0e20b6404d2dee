import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']  # hide internal decorator prefix_key from imports


def prefix_key(func: Callable) -> Callable:
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        return f'{self.prefix}:{key}' if self.prefix is not None else key

    return wrapper


class RedisKeySchema:
    """Provide standardized Redis keys for storing short links.

    An optional prefix can be provided to namespace all generated keys.
    It is highly encouraged to set a custom prefix for each app and environment,
    e.g. "linkshortener:prod" or "linkshortener:dev".

    Layout:
        <prefix>:links:meta:<code>     HASH  {target, created_at}
        <prefix>:links:visits:<code>   LIST  ISO-8601 visit timestamps, oldest first
        <prefix>:links:index           SET   every persisted code
    """

    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Prefix must be of type string (given type: {type(prefix)}).')

        self.prefix = prefix

    @prefix_key
    def link_key(self, code: str) -> str:
        return f'links:meta:{code}'

    @prefix_key
    def link_visits_key(self, code: str) -> str:
        return f'links:visits:{code}'

    @prefix_key
    def index_key(self) -> str:
        return 'links:index'

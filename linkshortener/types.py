from collections.abc import Callable
from datetime import datetime
from typing import Any


# Type aliases for Python dictionaries
type RedisConfiguration = dict[str, Any]
type ConfigDocument = dict[str, Any]

# Type aliases for injectable collaborators
type Clock = Callable[[], datetime]
type CodeFactory = Callable[[str], Any]

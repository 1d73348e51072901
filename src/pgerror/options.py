import codecs
from dataclasses import dataclass, fields, replace
from typing import Any

__all__ = [
    'ErrorOptions',
    'load_options',
]


@dataclass
class ErrorOptions:
    """Options

    - verbose: Capture the verbose message when translating errors (default: False)
    - show_context: Include the CONTEXT line in verbose messages (default: True)
    - show_location: Include the LOCATION line in verbose messages (default: True)
    - encoding: Encoding of messages returned by libpq (default: utf-8)
    """
    verbose: bool = False
    show_context: bool = True
    show_location: bool = True
    encoding: str = 'utf-8'

    def __post_init__(self):
        for name in ('verbose', 'show_context', 'show_location'):
            if not isinstance(getattr(self, name), bool):
                raise ValueError(f'{name} must be a bool')
        try:
            codecs.lookup(self.encoding)
        except (LookupError, TypeError) as err:
            raise ValueError(f'unknown encoding: {self.encoding!r}') from err


def load_options(options: ErrorOptions | dict[str, Any] | None = None,
                 **kw: Any) -> ErrorOptions:
    """Build `ErrorOptions` from an instance, a dict, or keyword arguments.

    Keyword arguments override values taken from `options`. Unknown keys
    raise `ValueError`.
    """
    if isinstance(options, ErrorOptions):
        return replace(options, **kw) if kw else options
    values = dict(options or {}, **kw)
    known = {field.name for field in fields(ErrorOptions)}
    unknown = set(values) - known
    if unknown:
        raise ValueError(f'unknown options: {sorted(unknown)}')
    return ErrorOptions(**values)

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple, Union

Number = Union[int, float]

EMPTY_MAPPING = MappingProxyType({})


def _freeze(mapping):
    if mapping is None:
        return None
    if isinstance(mapping, MappingProxyType):
        return mapping
    return MappingProxyType(dict(mapping))


def _plain(value):
    """Convierte mappings de solo lectura en dicts normales (para JSON)."""
    if isinstance(value, Mapping):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class Post:
    """Un post por archivo markdown. No se modifica tras construirse."""

    slug: str
    title: str
    description: Optional[str] = None
    date: Optional[str] = None
    weight: Optional[Number] = None
    extra: Optional[Mapping[str, Any]] = None
    content: Optional[str] = None
    params: Optional[Mapping[str, Any]] = None

    def __post_init__(self):
        object.__setattr__(self, 'extra', _freeze(self.extra))
        object.__setattr__(self, 'params', _freeze(self.params) or EMPTY_MAPPING)

    def _extra_str(self, key):
        value = (self.extra or {}).get(key)
        return value if isinstance(value, str) else None

    @property
    def link_to(self):
        return self._extra_str('link_to')

    @property
    def remote_image(self):
        return self._extra_str('remote_image')

    @property
    def local_image(self):
        return self._extra_str('local_image')

    @property
    def image_url(self):
        """remote_image tiene prioridad sobre local_image; los valores vacíos no cuentan."""
        for candidate in (self.remote_image, self.local_image):
            if candidate and candidate.strip():
                return candidate
        return None

    def to_dict(self):
        data = {
            'slug': self.slug,
            'title': self.title,
            'description': self.description,
            'date': self.date,
            'weight': self.weight,
            'extra': _plain(self.extra) if self.extra is not None else None,
            'content': self.content,
        }
        if self.params:
            data['params'] = _plain(self.params)
        return {k: v for k, v in data.items() if v is not None}


class LoadStatus(Enum):
    OK = "ok"
    DEGRADED = "degraded"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class LoadResult:
    """Resultado etiquetado: distingue registros limpios, degradados y de relleno."""

    post: Post
    status: LoadStatus = LoadStatus.OK
    issues: Tuple[str, ...] = ()

    @property
    def ok(self):
        return self.status is LoadStatus.OK

    @property
    def is_placeholder(self):
        return self.status is LoadStatus.PLACEHOLDER

    def to_dict(self):
        data = self.post.to_dict()
        data['status'] = self.status.value
        if self.issues:
            data['issues'] = list(self.issues)
        return data

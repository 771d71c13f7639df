import math
import re
import logging
from datetime import date, datetime

import frontmatter
import markdown
import yaml
from frontmatter.default_handlers import TOMLHandler, YAMLHandler
from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

from .config import DEFAULT_MARKDOWN_EXTENSIONS
from .models import LoadResult, LoadStatus, Post

logger = logging.getLogger(__name__)

TOML_DELIMITER = '+++'
KNOWN_FIELDS = ('title', 'description', 'date', 'weight', 'extra')

_WORD_START = re.compile(r'\b\w')
_PARTIAL_DATE = re.compile(r'^(\d{4})(?:-(\d{2}))?$')
_URL_SCHEME = re.compile(r'^([a-z][a-z0-9+.\-]*):')
_IGNORED_URL_CHARS = re.compile(r'[\x00-\x20\x7f]+')
SAFE_URL_SCHEMES = ('http', 'https', 'mailto')


def derive_title(slug):
    """'mi-primer-post' -> 'Mi Primer Post' (solo toca la primera letra de cada palabra)"""
    title = _WORD_START.sub(lambda m: m.group(0).upper(), slug.replace('-', ' ')).strip()
    return title or slug or 'Untitled'


def parse_date(value):
    """
    Fecha ISO (con o sin hora) o None si no se puede interpretar.
    También acepta fechas parciales 'YYYY' y 'YYYY-MM' (día 1 del periodo).
    """
    s = value.strip()
    if not s:
        return None
    m = _PARTIAL_DATE.match(s)
    if m:
        try:
            return datetime(int(m.group(1)), int(m.group(2) or 1), 1)
        except ValueError:
            return None
    # fromisoformat no acepta 'Z' antes de Python 3.11
    if s.endswith(('Z', 'z')):
        s = s[:-1] + '+00:00'
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None


def is_valid_date(value):
    return parse_date(value) is not None


def is_safe_url(value):
    """Relativas, anclas, http(s) y mailto. Cualquier otro esquema se descarta."""
    s = _IGNORED_URL_CHARS.sub('', value).lower()
    m = _URL_SCHEME.match(s)
    return m is None or m.group(1) in SAFE_URL_SCHEMES


def placeholder_post(slug, content=None):
    """Registro mínimo para archivos ausentes o corruptos."""
    return Post(slug=slug, title=derive_title(slug), content=content)


class StringDateLoader(yaml.SafeLoader):
    pass


# Las fechas YAML quedan como texto y las valida _date: una fecha imposible
# (2024-13-45) descarta el campo, no el archivo entero
StringDateLoader.add_constructor('tag:yaml.org,2002:timestamp', yaml.SafeLoader.construct_yaml_str)


class StringDateYAMLHandler(YAMLHandler):

    def load(self, fm, **kwargs):
        kwargs.setdefault('Loader', StringDateLoader)
        return super().load(fm, **kwargs)


class SafeLinksTreeprocessor(Treeprocessor):

    def run(self, root):
        for el in root.iter():
            for attr in ('href', 'src'):
                value = el.get(attr)
                if value is not None and not is_safe_url(value):
                    logger.warning(f"⚠️ Enlace con esquema no permitido eliminado: {value!r}")
                    del el.attrib[attr]


class SafeLinksExtension(Extension):

    def extendMarkdown(self, md):
        # Después del procesado inline, que es quien crea los enlaces
        md.treeprocessors.register(SafeLinksTreeprocessor(md), 'safe_links', 5)


class ContentParser:
    """Frontmatter (TOML o YAML) + validación de campos + markdown a HTML"""

    def __init__(self, extensions=DEFAULT_MARKDOWN_EXTENSIONS):
        self.extensions = list(extensions)

    def split(self, raw_md):
        """Devuelve (metadata, cuerpo). '+++' al inicio selecciona TOML, '---' YAML."""
        raw_md = raw_md.lstrip('\ufeff')
        if raw_md.startswith(TOML_DELIMITER):
            handler = TOMLHandler()
        else:
            handler = StringDateYAMLHandler()
            if not handler.detect(raw_md):
                # Sin frontmatter: todo es cuerpo
                return {}, raw_md.strip()
        post = frontmatter.loads(raw_md, handler=handler)
        return post.metadata, post.content

    def build(self, slug, metadata, filename, content=None):
        """Valida cada campo por separado: un campo malo se descarta, el registro sigue."""
        issues = []

        def warn(message):
            logger.warning(f"⚠️ {message}")
            issues.append(message)

        title = self._title(metadata.get('title'), slug, filename, warn)
        description = self._description(metadata.get('description'), filename, warn)
        date_value = self._date(metadata.get('date'), filename, warn)
        weight = self._weight(metadata.get('weight'), filename, warn)
        extra = self._extra(metadata.get('extra'), filename, warn)

        params = {k: v for k, v in metadata.items() if k not in KNOWN_FIELDS}

        post = Post(
            slug=slug,
            title=title,
            description=description,
            date=date_value,
            weight=weight,
            extra=extra,
            content=content,
            params=params,
        )
        status = LoadStatus.DEGRADED if issues else LoadStatus.OK
        return LoadResult(post=post, status=status, issues=tuple(issues))

    def parse(self, raw_md, slug, filename=None):
        """Parsea sin renderizar: (LoadResult sin content, cuerpo markdown)"""
        filename = filename or f"{slug}.md"
        metadata, body = self.split(raw_md)
        return self.build(slug, metadata, filename), body

    def render(self, body):
        """
        Markdown -> HTML. Cada llamada usa su propia instancia de Markdown
        y el HTML crudo del autor se escapa en vez de pasar tal cual.
        Los enlaces e imágenes con esquemas peligrosos (javascript:, data:...)
        pierden el atributo.
        """
        md = markdown.Markdown(extensions=self.extensions + [SafeLinksExtension()])
        md.preprocessors.deregister('html_block', strict=False)
        md.inlinePatterns.deregister('html', strict=False)
        return md.convert(body)

    def render_or_raw(self, body, slug):
        try:
            return self.render(body)
        except Exception as e:
            logger.error(f"❌ Error procesando el markdown de {slug}: {e}")
            # Si falla la conversión devolvemos el texto sin procesar
            return body or ''

    # --- Validación por campo ---

    @staticmethod
    def _title(value, slug, filename, warn):
        # Cualquier valor vacío o falso (None, '', 0, False) usa el slug
        if not value:
            return derive_title(slug)
        if not isinstance(value, str):
            warn(f"El título de {filename} no es texto, se convierte a texto")
            value = str(value)
        if not value.strip():
            return derive_title(slug)
        return value

    @staticmethod
    def _description(value, filename, warn):
        if value is None or isinstance(value, str):
            return value
        warn(f"La descripción de {filename} no es texto, se convierte a texto")
        return str(value)

    @staticmethod
    def _date(value, filename, warn):
        if value is None or value == '':
            return None
        # TOML entrega fechas nativas (el YAML las deja como texto)
        if isinstance(value, (datetime, date)):
            return value.isoformat()
        if not isinstance(value, str):
            warn(f"La fecha de {filename} no es texto, se ignora")
            return None
        if not is_valid_date(value):
            warn(f"Formato de fecha inválido en {filename}: {value}")
            return None
        return value.strip()

    @staticmethod
    def _weight(value, filename, warn):
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)) or math.isnan(value):
            warn(f"Peso inválido en {filename}: {value!r}, se usa 0")
            return 0
        return value

    @staticmethod
    def _extra(value, filename, warn):
        if value is None:
            return None
        if not isinstance(value, dict):
            warn(f"El campo extra de {filename} no es un objeto, se ignora")
            return None
        return {str(k): v for k, v in value.items()}

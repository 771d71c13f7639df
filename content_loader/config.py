import os
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

# --- CONFIGURACIÓN ---
DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_CONTENT_DIR = "content"
DEFAULT_EXTENSION = ".md"
DEFAULT_SECTIONS = ("projects", "photos")

# 'extra' sin attr_list ni md_in_html: ninguno de los dos debe poder inyectar HTML
DEFAULT_MARKDOWN_EXTENSIONS = (
    'abbr',
    'def_list',
    'fenced_code',
    'footnotes',
    'tables',
    'codehilite',
    'toc',
)


class SiteConfig:
    """Configuración explícita del cargador de contenido"""

    def __init__(self, content_dir=DEFAULT_CONTENT_DIR, extension=DEFAULT_EXTENSION,
                 sections=DEFAULT_SECTIONS, markdown_extensions=DEFAULT_MARKDOWN_EXTENSIONS):
        if not isinstance(content_dir, (str, os.PathLike)) or not str(content_dir).strip():
            raise ValueError(f"❌ 'content_dir' inválido: {content_dir!r}")
        if not isinstance(extension, str) or not extension.startswith('.') or len(extension) < 2:
            raise ValueError(f"❌ 'extension' debe empezar por '.': {extension!r}")
        if isinstance(sections, str) or not all(isinstance(s, str) and s for s in sections):
            raise ValueError(f"❌ 'sections' debe ser una lista de nombres: {sections!r}")
        if isinstance(markdown_extensions, str) or not all(isinstance(e, str) for e in markdown_extensions):
            raise ValueError(f"❌ 'markdown_extensions' debe ser una lista: {markdown_extensions!r}")

        self.content_dir = Path(content_dir)
        self.extension = extension
        self.sections = tuple(sections)
        self.markdown_extensions = tuple(markdown_extensions)

    @classmethod
    def from_file(cls, config_file=DEFAULT_CONFIG_FILE):
        """Carga el archivo de configuración JSON"""
        if not os.path.exists(config_file):
            raise FileNotFoundError(f"❌ No se encontró {config_file}")

        with open(config_file, 'r', encoding='utf-8') as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ValueError(f"❌ {config_file} no es JSON válido: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"❌ {config_file} debe contener un objeto JSON")

        known = {'content_dir', 'extension', 'sections', 'markdown_extensions'}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"⚠️ Claves desconocidas en {config_file}: {', '.join(unknown)}")

        config = cls(**{k: v for k, v in data.items() if k in known})

        # Las rutas relativas se resuelven respecto al archivo de configuración
        if not config.content_dir.is_absolute():
            config.content_dir = Path(config_file).resolve().parent / config.content_dir
        return config

    @classmethod
    def load(cls, config_file=None):
        """
        Configuración efectiva: archivo (si existe) + variables de entorno.
        CONTENT_LOADER_CONFIG elige el archivo y CONTENT_DIR pisa 'content_dir'.
        """
        config_file = config_file or os.getenv("CONTENT_LOADER_CONFIG")
        if config_file:
            config = cls.from_file(config_file)
        elif os.path.exists(DEFAULT_CONFIG_FILE):
            config = cls.from_file(DEFAULT_CONFIG_FILE)
        else:
            config = cls()

        content_dir = os.getenv("CONTENT_DIR")
        if content_dir:
            config.content_dir = Path(content_dir)
        return config

    def create_loader(self):
        from .loader import ContentLoader
        from .parser import ContentParser

        return ContentLoader(
            self.content_dir,
            parser=ContentParser(extensions=self.markdown_extensions),
            extension=self.extension,
        )

    def __repr__(self):
        return (f"SiteConfig(content_dir={str(self.content_dir)!r}, extension={self.extension!r}, "
                f"sections={list(self.sections)!r})")

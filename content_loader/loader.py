import os
import asyncio
import logging
from functools import cmp_to_key
from pathlib import Path

from .cards import photos_with_images
from .config import DEFAULT_EXTENSION
from .models import LoadResult, LoadStatus
from .parser import ContentParser, placeholder_post
from .sorting import compare_posts, sort_projects

logger = logging.getLogger(__name__)

PROJECTS_SECTION = "projects"
PHOTOS_SECTION = "photos"


def _placeholder_result(slug, reason, content=None):
    return LoadResult(
        post=placeholder_post(slug, content=content),
        status=LoadStatus.PLACEHOLDER,
        issues=(reason,),
    )


class ContentLoader:
    """
    Lee secciones de contenido (content/<seccion>/*.md) y devuelve posts.
    Nunca lanza excepciones hacia quien llama: un archivo roto produce un
    registro de relleno y el resto de la sección se carga igual.
    """

    def __init__(self, content_dir, parser=None, extension=DEFAULT_EXTENSION):
        self.content_dir = Path(content_dir)
        self.parser = parser or ContentParser()
        self.extension = extension

    def _inside_root(self, path):
        root = self.content_dir.resolve()
        try:
            path.resolve().relative_to(root)
        except ValueError:
            return False
        return True

    def section_path(self, section):
        path = self.content_dir / section
        if not self._inside_root(path) or path.resolve() == self.content_dir.resolve():
            logger.warning(f"⚠️ Sección fuera del directorio de contenido: {section!r}")
            return None
        return path

    def post_path(self, section, slug):
        section_path = self.section_path(section)
        if section_path is None:
            return None
        path = section_path / f"{slug}{self.extension}"
        if path.parent.resolve() != section_path.resolve():
            logger.warning(f"⚠️ Slug fuera de la sección {section}: {slug!r}")
            return None
        return path

    def list_files(self, section):
        """Archivos markdown publicables de la sección, en orden de nombre"""
        section_path = self.section_path(section)
        if section_path is None or not section_path.is_dir():
            return []

        try:
            names = sorted(os.listdir(section_path))
        except OSError as e:
            logger.warning(f"⚠️ No se pudo listar {section_path}: {e}")
            return []

        # '_' al inicio marca borradores y parciales
        return [
            section_path / name
            for name in names
            if name.endswith(self.extension) and not name.startswith('_')
        ]

    def _load_file(self, path):
        filename = path.name
        slug = filename[:-len(self.extension)]
        try:
            raw_md = path.read_text(encoding='utf-8')
            result, _ = self.parser.parse(raw_md, slug, filename=filename)
            return result
        except Exception as e:
            logger.error(f"❌ Error procesando {filename}: {e}")
            return _placeholder_result(slug, f"No se pudo procesar {filename}: {e}")

    def load_section_results(self, section):
        results = [self._load_file(path) for path in self.list_files(section)]
        results.sort(key=cmp_to_key(lambda a, b: compare_posts(a.post, b.post)))
        return results

    def load_section(self, section):
        """Todos los posts de una sección, ordenados (sin HTML renderizado)"""
        return [result.post for result in self.load_section_results(section)]

    async def load_post_result(self, section, slug):
        path = self.post_path(section, slug)
        if path is None:
            return _placeholder_result(slug, f"Ruta inválida para {section}/{slug}", content='')

        try:
            raw_md = path.read_text(encoding='utf-8')
            metadata, body = self.parser.split(raw_md)
        except Exception as e:
            logger.error(f"❌ Error leyendo el archivo {path}: {e}")
            return _placeholder_result(slug, f"No se pudo leer {path.name}: {e}", content='')

        # El render puede ser costoso: se hace fuera del event loop
        content = await asyncio.to_thread(self.parser.render_or_raw, body, slug)
        try:
            return self.parser.build(slug, metadata, path.name, content=content)
        except Exception as e:
            logger.error(f"❌ Error validando {path.name}: {e}")
            return _placeholder_result(slug, f"No se pudo validar {path.name}: {e}", content='')

    async def load_post(self, section, slug):
        """Un post con su contenido en HTML"""
        result = await self.load_post_result(section, slug)
        return result.post

    def get_all_projects(self):
        """Proyectos en el orden de la página de proyectos (peso, fecha, título)"""
        return sort_projects(self.load_section(PROJECTS_SECTION))

    def get_all_photos(self):
        """Fotos que tienen una imagen utilizable"""
        return photos_with_images(self.load_section(PHOTOS_SECTION))

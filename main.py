import sys
import json
import asyncio
import argparse
import logging

from content_loader.config import SiteConfig
from content_loader.logger import setup_logger

logger = logging.getLogger("content_loader.cli")


def _dump(data):
    print(json.dumps(data, ensure_ascii=False, indent=2, default=str))


async def run(args, config):
    loader = config.create_loader()

    def serialize(results_or_posts):
        return [item.to_dict() for item in results_or_posts]

    if args.post:
        if not args.section:
            logger.error("❌ --post necesita --section")
            return 2
        if args.status:
            result = await loader.load_post_result(args.section, args.post)
        else:
            result = await loader.load_post(args.section, args.post)
        _dump(result.to_dict())
        return 0

    if args.projects:
        _dump(serialize(loader.get_all_projects()))
        return 0

    if args.photos:
        _dump(serialize(loader.get_all_photos()))
        return 0

    sections = [args.section] if args.section else list(config.sections)
    output = {}
    for section in sections:
        if args.status:
            output[section] = serialize(loader.load_section_results(section))
        else:
            output[section] = serialize(loader.load_section(section))
        logger.info(f"📂 {section}: {len(output[section])} posts")

    _dump(output[sections[0]] if args.section else output)
    return 0


async def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Cargador de contenido markdown del sitio",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Ejemplos de uso:
  # Listar todas las secciones configuradas
  python main.py

  # Listar una sección
  python main.py --section projects

  # Un post con su HTML
  python main.py --section photos --post atardecer
        """
    )
    parser.add_argument('--config', '-c', type=str,
                        help='Archivo de configuración JSON (por defecto config.json)')
    parser.add_argument('--section', '-s', type=str,
                        help='Sección a cargar (por ejemplo projects o photos)')
    parser.add_argument('--post', '-p', type=str,
                        help='Slug de un post concreto (requiere --section)')
    parser.add_argument('--projects', action='store_true',
                        help='Proyectos en el orden de la página de proyectos')
    parser.add_argument('--photos', action='store_true',
                        help='Solo las fotos con imagen')
    parser.add_argument('--status', action='store_true',
                        help='Incluir el estado de carga (ok/degraded/placeholder)')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Mostrar mensajes de depuración')

    args = parser.parse_args(argv)

    setup_logger(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        config = SiteConfig.load(args.config)
    except (FileNotFoundError, ValueError) as e:
        logger.error(str(e))
        return 1

    return await run(args, config)


def cli():
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()

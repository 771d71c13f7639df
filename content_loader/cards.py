from .parser import parse_date


def project_link(post):
    """Enlace externo (extra.link_to) si existe, si no la página interna del proyecto"""
    if is_external(post):
        return post.link_to
    return f"/projects/{post.slug}"


def is_external(post):
    return bool(post.link_to and post.link_to.strip())


def photo_image(post):
    return post.image_url


def photos_with_images(posts):
    # Las fotos sin imagen no se muestran
    return [post for post in posts if photo_image(post)]


def format_date(value):
    """'2024-01-05' -> 'January 5, 2024'. Si no se puede interpretar, se devuelve tal cual."""
    if not value:
        return None
    d = parse_date(value)
    if d is None:
        return value
    return f"{d:%B} {d.day}, {d.year}"

from functools import cmp_to_key


def _cmp(a, b):
    return (a > b) - (a < b)


def compare_titles(a, b):
    # Orden alfabético sin distinguir mayúsculas; el texto exacto desempata
    return _cmp(a.title.casefold(), b.title.casefold()) or _cmp(a.title, b.title)


def compare_posts(a, b):
    """
    Orden de los listados:
    1. con fecha antes que sin fecha
    2. ambos con fecha: la más reciente primero
    3. ambos sin fecha y con peso: peso ascendente
    4. desempate final por título
    """
    if a.date and b.date:
        result = _cmp(b.date, a.date)
        if result:
            return result
    elif a.date:
        return -1
    elif b.date:
        return 1
    elif a.weight is not None and b.weight is not None:
        result = _cmp(a.weight, b.weight)
        if result:
            return result

    return compare_titles(a, b)


def compare_projects(a, b):
    """Página de proyectos: primero el peso, luego la fecha, luego el título."""
    if a.weight is not None and b.weight is not None:
        result = _cmp(a.weight, b.weight)
        if result:
            return result
    elif a.weight is not None:
        return -1
    elif b.weight is not None:
        return 1

    if a.date and b.date:
        result = _cmp(b.date, a.date)
        if result:
            return result
    elif a.date:
        return -1
    elif b.date:
        return 1

    return compare_titles(a, b)


def sort_posts(posts):
    return sorted(posts, key=cmp_to_key(compare_posts))


def sort_projects(posts):
    return sorted(posts, key=cmp_to_key(compare_projects))

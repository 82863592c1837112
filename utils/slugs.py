from django.utils.text import slugify


def generate_unique_slug(value: str, model, field: str = "slug", separator: str = "-", instance_pk=None) -> str:
    """Slugify ``value`` and append ``-1``, ``-2``... until no other row of ``model`` uses it.

    ``instance_pk`` excludes the row being saved so re-saving an object keeps its slug.
    """
    base_slug = slugify(value) or "item"
    slug = base_slug
    suffix = 1

    queryset = model._default_manager.all()
    if instance_pk is not None:
        queryset = queryset.exclude(pk=instance_pk)

    while queryset.filter(**{field: slug}).exists():
        slug = f"{base_slug}{separator}{suffix}"
        suffix += 1
    return slug

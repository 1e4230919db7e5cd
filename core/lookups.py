def as_pk(value):
    """Primary key from a path/body value, or ``None`` when it isn't one."""
    try:
        pk = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return pk if pk > 0 else None


def owned(queryset, owner, value, owner_field="owner"):
    pk = as_pk(value)
    if pk is None:
        return None
    return queryset.filter(**{owner_field: owner, "pk": pk}).first()

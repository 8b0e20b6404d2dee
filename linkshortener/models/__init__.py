from linkshortener.models.short_link_model import ShortLink, VisitStats


__all__ = [
    'ShortLink',
    'VisitStats',
]

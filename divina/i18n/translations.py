"""
Language resolution and server-side translation tables.

Content languages use the codes stored with the content itself (``sk``,
``cz``, ``en``, ``es``). Browsers and external services send other spellings
(``cs``, ``sk-SK``, ``en-GB``), which ``normalize_language`` maps back.
"""
from django.conf import settings

SUPPORTED_LANGUAGES = ['sk', 'cz', 'en', 'es']
FALLBACK_LANGUAGE = 'sk'

LANGUAGE_ALIASES = {
    'cs': 'cz',
    'cz': 'cz',
    'sk': 'sk',
    'en': 'en',
    'es': 'es',
}

TRANSLATIONS = {
    'sk': {
        'audio.prayer': 'Modlitba',
        'audio.lectio': 'Lectio',
        'audio.meditatio': 'Meditatio',
        'audio.oratio': 'Oratio',
        'audio.contemplatio': 'Contemplatio',
        'audio.actio': 'Actio',
        'audio.interlude_short': 'Meditačné pozadie - krátke',
        'audio.interlude_long': 'Meditačné pozadie - dlhšie',
        'bible.fallback_title': 'Biblický text',
        'rosary.joyful': 'Radostné tajomstvá',
        'rosary.luminous': 'Svetelné tajomstvá',
        'rosary.sorrowful': 'Bolestné tajomstvá',
        'rosary.glorious': 'Slávnostné tajomstvá',
        'step.prayers': 'Úvodné modlitby',
        'step.prayers.subtitle': 'Príprava',
        'step.intro': 'Úvod do tajomstva',
        'step.intro.subtitle': 'Uvedenie',
        'step.lectio': 'LECTIO',
        'step.lectio.subtitle': 'Čítanie',
        'step.commentary': 'Komentár',
        'step.commentary.subtitle': 'Vysvetlenie',
        'step.meditatio': 'MEDITATIO',
        'step.meditatio.subtitle': 'Rozjímanie',
        'step.oratio': 'ORATIO',
        'step.oratio.subtitle': 'Modlitba',
        'step.contemplatio': 'CONTEMPLATIO',
        'step.contemplatio.subtitle': 'Kontemplácia',
        'step.actio': 'ACTIO',
        'step.actio.subtitle': 'Konanie',
        'error.calendar_day_not_found': 'Pre zvolený dátum neexistuje záznam v liturgickom kalendári',
        'error.no_lectio_key': 'Kalendárny deň nemá priradenú hlavu lectio',
        'error.year_not_found': 'Liturgický rok sa nenašiel',
        'error.source_not_found': 'Zdroj lectio sa nenašiel v žiadnom jazyku',
    },
    'cz': {
        'audio.prayer': 'Modlitba',
        'audio.lectio': 'Lectio',
        'audio.meditatio': 'Meditatio',
        'audio.oratio': 'Oratio',
        'audio.contemplatio': 'Contemplatio',
        'audio.actio': 'Actio',
        'audio.interlude_short': 'Meditační pozadí - krátké',
        'audio.interlude_long': 'Meditační pozadí - delší',
        'bible.fallback_title': 'Biblický text',
        'rosary.joyful': 'Radostná tajemství',
        'rosary.luminous': 'Světelná tajemství',
        'rosary.sorrowful': 'Bolestná tajemství',
        'rosary.glorious': 'Slavnostní tajemství',
        'step.prayers': 'Úvodní modlitby',
        'step.prayers.subtitle': 'Příprava',
        'step.intro': 'Úvod do tajemství',
        'step.intro.subtitle': 'Uvedení',
        'step.lectio': 'LECTIO',
        'step.lectio.subtitle': 'Čtení',
        'step.commentary': 'Komentář',
        'step.commentary.subtitle': 'Vysvětlení',
        'step.meditatio': 'MEDITATIO',
        'step.meditatio.subtitle': 'Rozjímání',
        'step.oratio': 'ORATIO',
        'step.oratio.subtitle': 'Modlitba',
        'step.contemplatio': 'CONTEMPLATIO',
        'step.contemplatio.subtitle': 'Kontemplace',
        'step.actio': 'ACTIO',
        'step.actio.subtitle': 'Konání',
        'error.calendar_day_not_found': 'Pro zvolené datum neexistuje záznam v liturgickém kalendáři',
        'error.no_lectio_key': 'Kalendářní den nemá přiřazenou hlavu lectio',
        'error.year_not_found': 'Liturgický rok nebyl nalezen',
        'error.source_not_found': 'Zdroj lectio nebyl nalezen v žádném jazyce',
    },
    'en': {
        'audio.prayer': 'Prayer',
        'audio.lectio': 'Lectio',
        'audio.meditatio': 'Meditatio',
        'audio.oratio': 'Oratio',
        'audio.contemplatio': 'Contemplatio',
        'audio.actio': 'Actio',
        'audio.interlude_short': 'Meditative background - short',
        'audio.interlude_long': 'Meditative background - long',
        'bible.fallback_title': 'Biblical text',
        'rosary.joyful': 'Joyful Mysteries',
        'rosary.luminous': 'Luminous Mysteries',
        'rosary.sorrowful': 'Sorrowful Mysteries',
        'rosary.glorious': 'Glorious Mysteries',
        'step.prayers': 'Opening Prayers',
        'step.prayers.subtitle': 'Preparation',
        'step.intro': 'Introduction to the Mystery',
        'step.intro.subtitle': 'Introduction',
        'step.lectio': 'LECTIO',
        'step.lectio.subtitle': 'Reading',
        'step.commentary': 'Commentary',
        'step.commentary.subtitle': 'Explanation',
        'step.meditatio': 'MEDITATIO',
        'step.meditatio.subtitle': 'Meditation',
        'step.oratio': 'ORATIO',
        'step.oratio.subtitle': 'Prayer',
        'step.contemplatio': 'CONTEMPLATIO',
        'step.contemplatio.subtitle': 'Contemplation',
        'step.actio': 'ACTIO',
        'step.actio.subtitle': 'Action',
        'error.calendar_day_not_found': 'No liturgical calendar entry exists for the selected date',
        'error.no_lectio_key': 'Calendar day has no assigned lectio chapter key',
        'error.year_not_found': 'Liturgical year not found',
        'error.source_not_found': 'Lectio source not found for any language',
    },
    'es': {
        'audio.prayer': 'Oración',
        'audio.lectio': 'Lectio',
        'audio.meditatio': 'Meditatio',
        'audio.oratio': 'Oratio',
        'audio.contemplatio': 'Contemplatio',
        'audio.actio': 'Actio',
        'audio.interlude_short': 'Fondo meditativo - corto',
        'audio.interlude_long': 'Fondo meditativo - largo',
        'bible.fallback_title': 'Texto bíblico',
        'rosary.joyful': 'Misterios Gozosos',
        'rosary.luminous': 'Misterios Luminosos',
        'rosary.sorrowful': 'Misterios Dolorosos',
        'rosary.glorious': 'Misterios Gloriosos',
        'step.prayers': 'Oraciones Iniciales',
        'step.prayers.subtitle': 'Preparación',
        'step.intro': 'Introducción al Misterio',
        'step.intro.subtitle': 'Introducción',
        'step.lectio': 'LECTIO',
        'step.lectio.subtitle': 'Lectura',
        'step.commentary': 'Comentario',
        'step.commentary.subtitle': 'Explicación',
        'step.meditatio': 'MEDITATIO',
        'step.meditatio.subtitle': 'Meditación',
        'step.oratio': 'ORATIO',
        'step.oratio.subtitle': 'Oración',
        'step.contemplatio': 'CONTEMPLATIO',
        'step.contemplatio.subtitle': 'Contemplación',
        'step.actio': 'ACTIO',
        'step.actio.subtitle': 'Acción',
        'error.calendar_day_not_found': 'No existe ninguna entrada del calendario litúrgico para la fecha seleccionada',
        'error.no_lectio_key': 'El día del calendario no tiene asignado ningún capítulo de lectio',
        'error.year_not_found': 'No se encontró el año litúrgico',
        'error.source_not_found': 'No se encontró la fuente de lectio en ningún idioma',
    },
}


def default_language():
    return normalize_language(getattr(settings, 'DEFAULT_CONTENT_LANGUAGE', FALLBACK_LANGUAGE)) or FALLBACK_LANGUAGE


def normalize_language(code):
    """Map a language tag such as ``cs``, ``sk-SK`` or ``EN`` to a supported code, or None"""
    if not code:
        return None
    primary = str(code).strip().lower().replace('_', '-').split('-')[0]
    return LANGUAGE_ALIASES.get(primary)


def parse_accept_language(header):
    """Return the first supported language from an Accept-Language header, honouring q-values"""
    if not header:
        return None
    candidates = []
    for index, part in enumerate(header.split(',')):
        pieces = part.strip().split(';')
        tag = pieces[0].strip()
        quality = 1.0
        for param in pieces[1:]:
            param = param.strip()
            if param.startswith('q='):
                try:
                    quality = float(param[2:])
                except ValueError:
                    quality = 0.0
        candidates.append((-quality, index, tag))
    for _, _, tag in sorted(candidates):
        language = normalize_language(tag)
        if language:
            return language
    return None


def resolve_language(request, param='lang'):
    """
    Language for a request: explicit query parameter, then the signed-in
    user's preference, then the Accept-Language header, then the default.
    """
    query_params = getattr(request, 'query_params', None) or getattr(request, 'GET', {})
    language = normalize_language(query_params.get(param))
    if language:
        return language

    user = getattr(request, 'user', None)
    if user is not None and user.is_authenticated:
        language = normalize_language(getattr(user, 'preferred_language', None))
        if language:
            return language

    language = parse_accept_language(request.META.get('HTTP_ACCEPT_LANGUAGE'))
    return language or default_language()


def translate(key, lang=None):
    """Translated text for ``key``, falling back to Slovak and then to the key itself"""
    table = TRANSLATIONS.get(normalize_language(lang) or FALLBACK_LANGUAGE, {})
    if key in table:
        return table[key]
    return TRANSLATIONS[FALLBACK_LANGUAGE].get(key, key)


def get_translations(lang):
    """Complete table for one language, missing keys filled from Slovak"""
    merged = dict(TRANSLATIONS[FALLBACK_LANGUAGE])
    merged.update(TRANSLATIONS.get(normalize_language(lang) or FALLBACK_LANGUAGE, {}))
    return merged

"""
Rosary structure: four categories of five mysteries, each mystery prayed
through the Lectio Divina steps.
"""
from divina.i18n.translations import translate
from divina.lectio.playlist import build_playlist
from .models import RosaryDecade

CATEGORIES = ['joyful', 'luminous', 'sorrowful', 'glorious']
DECADES_PER_CATEGORY = 5

# (step, suggested minutes)
LECTIO_STEPS = [
    ('intro', 2),
    ('lectio', 5),
    ('meditatio', 10),
    ('oratio', 15),
    ('contemplatio', 10),
    ('actio', 5),
]

# slide key -> (text field, audio field, step number)
SLIDE_FIELDS = [
    ('prayers', 'opening_prayers', 'opening_prayers_audio', 0),
    ('intro', 'intro', 'intro_audio', 1),
    ('lectio', 'lectio_text', 'lectio_audio', 2),
    ('commentary', 'commentary', 'commentary_audio', 3),
    ('meditatio', 'meditatio_text', 'meditatio_audio', 4),
    ('oratio', 'oratio_html', 'oratio_audio', 5),
    ('contemplatio', 'contemplatio_text', 'contemplatio_audio', 6),
    ('actio', 'actio_text', 'actio_audio', 7),
]
TOTAL_STEPS = 7


def is_valid_category(category):
    return category in CATEGORIES


def format_duration(minutes):
    """45 -> '45 min', 60 -> '1 h', 75 -> '1 h 15 min'"""
    if minutes < 60:
        return f"{minutes} min"
    hours, rest = divmod(minutes, 60)
    if rest == 0:
        return f"{hours} h"
    return f"{hours} h {rest} min"


def total_duration():
    return sum(minutes for _, minutes in LECTIO_STEPS)


def lectio_steps(lang=None):
    steps = [{
        'key': key,
        'name': translate(f'step.{key}', lang),
        'subtitle': translate(f'step.{key}.subtitle', lang),
        'minutes': minutes,
        'duration': format_duration(minutes),
    } for key, minutes in LECTIO_STEPS]
    return {
        'steps': steps,
        'total_minutes': total_duration(),
        'total_duration': format_duration(total_duration()),
    }


def category_info(category, lang=None):
    return {
        'key': category,
        'name': translate(f'rosary.{category}', lang),
        'order': CATEGORIES.index(category) + 1,
    }


def published_decades(category, lang):
    return RosaryDecade.objects.filter(category=category, lang=lang, is_published=True).order_by('order', 'id')


def get_decade(category, number, lang):
    """The ``number``-th (1-based) published decade of a category, or None"""
    if not is_valid_category(category) or number < 1:
        return None
    decades = list(published_decades(category, lang)[number - 1:number])
    return decades[0] if decades else None


def navigation(category, number, lang=None):
    """
    Previous and next mystery. Moving past the fifth mystery continues with the
    first of the next category, and back from the first goes to the fifth of the
    previous one. The joyful first and glorious fifth mysteries are the ends.
    """
    index = CATEGORIES.index(category)

    if number > 1:
        previous = (category, number - 1)
    elif index > 0:
        previous = (CATEGORIES[index - 1], DECADES_PER_CATEGORY)
    else:
        previous = None

    if number < DECADES_PER_CATEGORY:
        following = (category, number + 1)
    elif index < len(CATEGORIES) - 1:
        following = (CATEGORIES[index + 1], 1)
    else:
        following = None

    def describe(position):
        if position is None:
            return None
        return {
            'category': position[0],
            'category_name': translate(f'rosary.{position[0]}', lang),
            'number': position[1],
        }

    return {'previous': describe(previous), 'next': describe(following)}


def title_before_dash(title):
    for dash in ('–', ' - '):
        if dash in title:
            return title.split(dash, 1)[0].strip()
    return title


def decade_slides(decade, lang=None):
    """Slides of a decade in prayer order; steps without text are skipped except the intro"""
    slides = []
    for key, text_field, audio_field, step in SLIDE_FIELDS:
        text = getattr(decade, text_field)
        if key == 'intro':
            text = text or decade.bible_text
            title = title_before_dash(decade.title)
            subtitle = translate('step.intro', lang)
        elif not text:
            continue
        else:
            title = translate(f'step.{key}', lang)
            subtitle = translate(f'step.{key}.subtitle', lang)
        slides.append({
            'key': key,
            'title': title,
            'subtitle': subtitle,
            'text': text,
            'audio_url': getattr(decade, audio_field) or None,
            'step': f'{step}/{TOTAL_STEPS}',
        })
    return slides


def decade_playlist(slides, mode='none', lang=None):
    sections = [{
        'key': slide['key'],
        'label': slide['title'],
        'url': slide['audio_url'],
        'slide': index,
    } for index, slide in enumerate(slides)]
    return build_playlist(sections, mode, lang)

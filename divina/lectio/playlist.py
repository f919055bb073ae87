"""
Audio playlists with interlude tracks.

A playlist is the ordered list of sections that have audio. Depending on the
playback mode an interlude (a silent pause or a longer meditative background)
is placed between consecutive sections:

* ``none``  - sections follow each other directly
* ``short`` - short interlude, except after contemplatio which gets the long one
* ``long``  - long interlude everywhere
"""
from django.conf import settings

from divina.i18n.translations import translate
from .models import LectioSource

INTERLUDE_MODES = ['none', 'short', 'long']
LONG_AFTER_SECTIONS = ['contemplatio']

LECTIO_STEPS = ['lectio', 'meditatio', 'oratio', 'contemplatio', 'actio']


class PlaylistError(ValueError):
    pass


def interlude_for(section_key, mode, lang=None):
    """Interlude track to play after ``section_key``, or None"""
    if mode == 'none':
        return None
    if mode == 'long' or section_key in LONG_AFTER_SECTIONS:
        return {
            'key': 'interlude',
            'kind': 'interlude',
            'variant': 'long',
            'label': translate('audio.interlude_long', lang),
            'url': settings.LECTIO_INTERLUDE_LONG_URL,
        }
    return {
        'key': 'interlude',
        'kind': 'interlude',
        'variant': 'short',
        'label': translate('audio.interlude_short', lang),
        'url': settings.LECTIO_INTERLUDE_SHORT_URL,
    }


def build_playlist(sections, mode='none', lang=None):
    """
    Interleave ``sections`` (dicts with key, label, url and slide) with
    interludes. Sections without a url are dropped first, so interludes only
    ever sit between two playable tracks.
    """
    if mode not in INTERLUDE_MODES:
        raise PlaylistError(f"Invalid mode '{mode}'. Supported: {', '.join(INTERLUDE_MODES)}")

    playable = [section for section in sections if section.get('url')]
    tracks = []
    for index, section in enumerate(playable):
        tracks.append(dict(section, kind='section'))
        if index < len(playable) - 1:
            interlude = interlude_for(section['key'], mode, lang)
            if interlude is not None:
                # the interlude belongs to the slide of the section that follows it
                interlude['slide'] = playable[index + 1].get('slide')
                tracks.append(interlude)
    return tracks


def select_bible(source, requested=None):
    """Requested translation when it has text, otherwise the first one that does"""
    if requested not in LectioSource.BIBLE_KEYS:
        requested = LectioSource.BIBLE_KEYS[0]
    if getattr(source, requested):
        return requested
    for key in LectioSource.BIBLE_KEYS:
        if getattr(source, key):
            return key
    return requested


def lectio_sections(source, bible, lang=None):
    """Audio sections of a lectio reading in playback order"""
    sections = [{
        'key': 'prayer',
        'label': translate('audio.prayer', lang),
        'url': source.opening_prayer_audio,
        'slide': None,
    }, {
        'key': bible,
        'label': getattr(source, f'{bible}_title') or translate('bible.fallback_title', lang),
        'url': getattr(source, f'{bible}_audio'),
        'slide': 0,
    }]
    for slide, step in enumerate(LECTIO_STEPS, start=1):
        sections.append({
            'key': step,
            'label': translate(f'audio.{step}', lang),
            'url': getattr(source, f'{step}_audio'),
            'slide': slide,
        })
    return sections


def lectio_playlist(source, bible=None, mode='none', lang=None):
    selected = select_bible(source, bible)
    return {
        'bible': selected,
        'mode': mode,
        'tracks': build_playlist(lectio_sections(source, selected, lang), mode, lang),
    }

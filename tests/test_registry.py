import pytest

from langsniff.errors import UnknownLanguageCode
from langsniff.registry import LANGUAGE_CODES, LanguageRegistry, base_code


def test_resolve_is_case_insensitive_and_trims_whitespace(registry):
    assert registry.resolve([' FR ', 'de']) == frozenset({'fr', 'de'})


def test_resolve_empty_sequence_means_unrestricted(registry):
    assert registry.resolve([]) == frozenset()


def test_resolve_maps_regional_identifiers_to_one_code(registry):
    assert registry.resolve(['zh']) == frozenset({'zh-cn', 'zh-tw'})


def test_unknown_code_is_named_in_the_error(registry):
    with pytest.raises(UnknownLanguageCode) as excinfo:
        registry.resolve(['fr', 'xx'])
    assert excinfo.value.code == 'xx'
    assert "'xx'" in str(excinfo.value)


def test_empty_item_is_rejected_not_dropped(registry):
    with pytest.raises(UnknownLanguageCode):
        registry.resolve(['fr', '', 'de'])


def test_iso_code_outside_engine_is_unknown(registry):
    assert 'ja' in LANGUAGE_CODES
    with pytest.raises(UnknownLanguageCode):
        registry.resolve(['ja'])


def test_code_for_strips_region(registry):
    assert registry.code_for('zh-tw') == 'zh'
    assert registry.code_for('fr') == 'fr'


def test_non_iso_labels_are_listed_but_not_resolvable():
    registry = LanguageRegistry(['en', 'fr', 'ceb'])
    assert registry.code_for('ceb') == 'ceb'
    assert ('ceb', 'ceb') in registry.listing()
    with pytest.raises(UnknownLanguageCode):
        registry.resolve(['ceb'])


def test_listing_is_sorted_with_names(registry):
    listing = registry.listing()
    assert listing == sorted(listing)
    assert ('fr', 'French') in listing
    assert ('zh', 'Chinese') in listing
    assert len(registry) == len(listing)


def test_base_code():
    assert base_code('zh-cn') == 'zh'
    assert base_code('pt_BR') == 'pt'
    assert base_code('EN') == 'en'

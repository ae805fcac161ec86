"""Encoding of call tree filters for query strings.

A filter list is written as '~' separated tokens of the form
'<type>-<encoded func indices>', e.g. 'prefix-0w2~postfix-a'. Function index
arrays are encoded five bits per character, with the 0x20 bit marking that more
characters of the same number follow.
"""
from hang_profile_summarizer.profile import get_func_name

ENCODING_CHARS = '0123456789abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ._'

FILTER_FUNCS_KEYS = {
    'prefix': 'prefixFuncs',
    'postfix': 'postfixFuncs',
}


class CallTreeFilterError(ValueError):
    pass


def encode_uint(value):
    if value < 0:
        raise CallTreeFilterError('Cannot encode negative value {}'.format(value))
    result = ENCODING_CHARS[value & 0x1f]
    value >>= 5
    while value != 0:
        result = ENCODING_CHARS[0x20 | (value & 0x1f)] + result
        value >>= 5
    return result


def uint_array_to_string(values):
    return ''.join(encode_uint(value) for value in values)


def string_to_uint_array(string):
    result = []
    value = 0
    pending = False
    for char in string:
        char_value = ENCODING_CHARS.find(char)
        if char_value == -1:
            raise CallTreeFilterError('Invalid character {!r} in {!r}'.format(char, string))
        value = (value << 5) | (char_value & 0x1f)
        pending = bool(char_value & 0x20)
        if not pending:
            result.append(value)
            value = 0
    if pending:
        raise CallTreeFilterError('Unterminated value in {!r}'.format(string))
    return result


def parse_call_tree_filters(string_value=''):
    if not string_value:
        return []

    filters = []
    for token in string_value.split('~'):
        filter_type, _, encoded = token.partition('-')
        if filter_type not in FILTER_FUNCS_KEYS:
            raise CallTreeFilterError('Unknown call tree filter type {!r}'.format(filter_type))
        filters.append({
            'type': filter_type,
            FILTER_FUNCS_KEYS[filter_type]: string_to_uint_array(encoded),
        })
    return filters


def stringify_call_tree_filters(filters=()):
    tokens = []
    for call_tree_filter in filters:
        filter_type = call_tree_filter.get('type')
        if filter_type not in FILTER_FUNCS_KEYS:
            raise CallTreeFilterError('Unknown call tree filter type {!r}'.format(filter_type))
        funcs = call_tree_filter[FILTER_FUNCS_KEYS[filter_type]]
        tokens.append(filter_type + '-' + uint_array_to_string(funcs))
    return '~'.join(tokens)


def get_call_tree_filter_labels(thread, filters):
    """Breadcrumb labels: the whole thread, then the innermost function of each filter."""
    labels = ['Complete "{}"'.format(thread['name'])]
    for call_tree_filter in filters:
        filter_type = call_tree_filter.get('type')
        if filter_type not in FILTER_FUNCS_KEYS:
            raise CallTreeFilterError('Unexpected filter type {!r}'.format(filter_type))
        funcs = call_tree_filter[FILTER_FUNCS_KEYS[filter_type]]
        if not funcs:
            raise CallTreeFilterError('Empty {} filter'.format(filter_type))
        labels.append(get_func_name(thread, funcs[-1]))
    return labels

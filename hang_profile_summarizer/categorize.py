from hang_profile_summarizer.categories import (CATEGORIES, UNCATEGORIZED, UNCLASSIFIED,
                                                WAIT, function_name_categorizer)
from hang_profile_summarizer.profile import (get_func_name, get_sample_count, get_sample_hang_ms,
                                             get_string_array, is_no_stack)
from hang_profile_summarizer.util import debug_dump, time_code


def merge_wait_category(prefix_category):
    """Tag the caller's category as waiting.

    A blocking primitive reports whatever its caller was doing, suffixed with
    '.wait', rather than an opaque 'wait' leaf.
    """
    if prefix_category is None or prefix_category == UNCATEGORIZED:
        return WAIT
    if prefix_category.endswith('.' + WAIT) or prefix_category == WAIT:
        return prefix_category
    return prefix_category + '.' + WAIT


def stack_categorizer(thread, categories=CATEGORIES):
    """Return a function mapping a stack index of thread to a category or None.

    Frames with no matching rule are transparent, and 'wait' frames merge into
    their caller's category. Every stack index resolved along the way is cached,
    so samples sharing stacks or prefixes are cheap after the first walk.
    """
    function_name_to_category = function_name_categorizer(categories)
    stack_table = thread['stackTable']
    stack_category_cache = {}

    def categorize_stack(stack_index):
        # Frames still waiting on their caller's category, leaf first.
        pending = []
        category = None
        while True:
            if is_no_stack(stack_index):
                category = None
                break
            if stack_index in stack_category_cache:
                category = stack_category_cache[stack_index]
                break

            func_category = function_name_to_category(
                get_func_name(thread, stack_table['func'][stack_index]))
            if func_category is not UNCLASSIFIED and func_category != WAIT:
                category = func_category
                stack_category_cache[stack_index] = category
                break

            pending.append((stack_index, func_category))
            stack_index = stack_table['prefix'][stack_index]

        for stack_index, func_category in reversed(pending):
            if func_category == WAIT:
                category = merge_wait_category(category)
            stack_category_cache[stack_index] = category

        return category

    return categorize_stack


def sample_categorizer(thread, categories=CATEGORIES):
    """Return a function mapping a sample index of thread to a category or None.

    Profiles that already carry a category column are trusted as is; the stack
    walk only runs for samples of profiles that don't.
    """
    sample_table = thread['sampleTable']
    if sample_table.get('category') is not None:
        string_array = get_string_array(thread)

        def categorize_precomputed_sample(sample_index):
            category = sample_table['category'][sample_index]
            return None if category is None else string_array[category]

        return categorize_precomputed_sample

    categorize_stack = stack_categorizer(thread, categories)

    def categorize_sample(sample_index):
        return categorize_stack(sample_table['stack'][sample_index])

    return categorize_sample


def categorize_thread(thread, categories=CATEGORIES):
    categorize_sample = sample_categorizer(thread, categories)
    hang_ms = get_sample_hang_ms(thread)

    result = []
    for i in range(get_sample_count(thread)):
        try:
            category = categorize_sample(i)
        except (AttributeError, IndexError, KeyError, TypeError) as e:
            debug_dump("Could not categorize sample {} of thread {}: {!r}".format(
                i, thread.get('name'), e))
            category = None
        result.append({
            'category': category,
            'hangMs': hang_ms[i] if i < len(hang_ms) else 0.0,
        })
    return result


def categorize_thread_data(profile, categories=CATEGORIES):
    """Categorize every sample of every thread of profile.

    Returns one list per thread, aligned with its sample table, of
    {'category': str or None, 'hangMs': float}.
    """
    if 'threads' not in profile:
        raise ValueError('Profile has no threads.')

    return time_code("Categorizing thread data",
                     lambda: [categorize_thread(thread, categories)
                              for thread in profile['threads']])

from hang_profile_summarizer.categories import CATEGORIES
from hang_profile_summarizer.categorize import stack_categorizer
from hang_profile_summarizer.profile import GrowToFitList, UniqueKeyedTable
from hang_profile_summarizer.util import merge_number_dicts


def get_process_type(thread_name):
    if thread_name == 'Gecko_Child' or thread_name == 'Gecko_Child_ForcePaint':
        return 'tab'
    return 'default'


def get_default_thread(name):
    string_array = UniqueKeyedTable(lambda string: string)
    func_table = UniqueKeyedTable(lambda key: (
        string_array.key_to_index(key[0]),
        None if key[1] is None else string_array.key_to_index(key[1])
    ), ('name', 'lib'))
    stack_table = UniqueKeyedTable(lambda key: (
        key[2],
        func_table.key_to_index((key[0], key[1]))
    ), ('prefix', 'func'))
    sample_table = UniqueKeyedTable(lambda key: (key,), ('stack',))

    return {
        'name': name,
        'processType': get_process_type(name),
        'stringArray': string_array,
        'funcTable': func_table,
        'stackTable': stack_table,
        'sampleTable': sample_table,
        'dates': UniqueKeyedTable(lambda date: ({
            'date': date,
            'sampleHangMs': GrowToFitList(),
            'sampleHangCount': GrowToFitList()
        })),
    }


def to_frame(frame):
    if isinstance(frame, str):
        return (frame, None)
    func_name, lib_name = frame
    return (func_name, lib_name)


def process_thread(thread, categories=None):
    string_array = thread['stringArray']
    sample_table = thread['sampleTable'].struct_of_arrays()
    dates = [{
        'date': date['date'],
        'sampleHangMs': list(date['sampleHangMs']),
        'sampleHangCount': list(date['sampleHangCount']),
    } for date in thread['dates'].get_items()]

    sample_table['sampleHangMs'] = [
        sum(date['sampleHangMs'][i] or 0.0 for date in dates if i < len(date['sampleHangMs']))
        for i in range(sample_table['length'])
    ]

    processed = {
        'name': thread['name'],
        'processType': thread['processType'],
        'funcTable': thread['funcTable'].struct_of_arrays(),
        'stackTable': thread['stackTable'].struct_of_arrays(),
        'sampleTable': sample_table,
        # Shares the interned list, so strings added below show up here too.
        'stringArray': string_array.get_items(),
        'dates': dates,
    }

    if categories is not None:
        categorize_stack = stack_categorizer(processed, categories)
        sample_categories = []
        for stack_index in sample_table['stack']:
            category_string = categorize_stack(stack_index)
            if category_string is None:
                sample_categories.append(None)
            else:
                sample_categories.append(string_array.key_to_index(category_string))
        sample_table['category'] = sample_categories

    return processed


class ProfileBuilder(object):
    """Collects hang rows into a processed profile.

    Each row is (stack, thread_name, build_date, hang_ms, hang_count), where the
    stack lists frames root first, each either a function name or a
    (function name, library name) pair. An empty stack is recorded as a sample
    without a stack.
    """
    def __init__(self, config=None):
        self.config = config or {}
        self.thread_table = UniqueKeyedTable(get_default_thread)
        self.usage_hours_by_date = {}

    def ingest_row(self, row):
        stack, thread_name, build_date, hang_ms, hang_count = row

        thread = self.thread_table.key_to_item(thread_name)
        stack_table = thread['stackTable']
        sample_table = thread['sampleTable']
        dates = thread['dates']

        last_stack = None
        for frame in stack:
            func_name, lib_name = to_frame(frame)
            last_stack = stack_table.key_to_index((func_name, lib_name, last_stack))

        sample_index = sample_table.key_to_index(last_stack)

        date = dates.key_to_item(build_date)
        if date['sampleHangMs'][sample_index] is None:
            date['sampleHangMs'][sample_index] = 0.0
            date['sampleHangCount'][sample_index] = 0

        date['sampleHangMs'][sample_index] += hang_ms
        date['sampleHangCount'][sample_index] += hang_count

    def ingest(self, data, usage_hours_by_date=None):
        # x[3] should be hang_ms
        for row in data:
            if row[3] > 0.0:
                self.ingest_row(row)

        if usage_hours_by_date:
            self.usage_hours_by_date = merge_number_dicts(self.usage_hours_by_date,
                                                          usage_hours_by_date)

    def process_into_profile(self, categorize=False):
        categories = self.config.get('categories', CATEGORIES) if categorize else None
        return {
            'threads': [process_thread(t, categories) for t in self.thread_table.get_items()],
            'usageHoursByDate': self.usage_hours_by_date,
            'uuid': self.config.get('uuid'),
        }

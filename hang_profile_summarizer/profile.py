class UniqueKeyedTable(object):
    def __init__(self, get_default_from_key, key_names=()):
        self.get_default_from_key = get_default_from_key
        self.key_to_index_map = {}
        self.key_names = key_names
        self.items = []

    def __len__(self):
        return len(self.items)

    def key_to_index(self, key):
        if key in self.key_to_index_map:
            return self.key_to_index_map[key]

        index = len(self.items)
        self.items.append(self.get_default_from_key(key))
        self.key_to_index_map[key] = index
        return index

    def key_to_item(self, key):
        return self.items[self.key_to_index(key)]

    def index_to_item(self, index):
        return self.items[index]

    def get_items(self):
        return self.items

    def struct_of_arrays(self):
        result = {name: [item[i] for item in self.items]
                  for i, name in enumerate(self.key_names)}
        result['length'] = len(self.items)
        return result


class GrowToFitList(list):
    def __setitem__(self, index, value):
        if index >= len(self):
            to_grow = index + 1 - len(self)
            self.extend([None] * to_grow)
        list.__setitem__(self, index, value)

    def __getitem__(self, index):
        if index >= len(self):
            return None
        return list.__getitem__(self, index)


def is_no_stack(stack_index):
    return stack_index is None or stack_index < 0


def get_string_array(thread):
    # The job writes stringArray; front-end profiles carry a stringTable, either
    # a list or an object holding _array.
    if 'stringArray' in thread:
        return thread['stringArray']
    string_table = thread['stringTable']
    if isinstance(string_table, dict):
        return string_table['_array']
    return string_table


def get_sample_count(thread):
    sample_table = thread['sampleTable']
    if 'length' in sample_table:
        return sample_table['length']
    return len(sample_table['stack'])


def get_sample_hang_ms(thread):
    # Without a sampleHangMs column, a sample's hang time is its sum over all dates.
    sample_table = thread['sampleTable']
    if sample_table.get('sampleHangMs') is not None:
        return sample_table['sampleHangMs']

    hang_ms = [0.0] * get_sample_count(thread)
    for date in thread.get('dates', []):
        for i, value in enumerate(date['sampleHangMs']):
            if value is not None and i < len(hang_ms):
                hang_ms[i] += value
    return hang_ms


def get_func_name(thread, func_index):
    return get_string_array(thread)[thread['funcTable']['name'][func_index]]

from hang_profile_summarizer.builder import ProfileBuilder
from hang_profile_summarizer.categorize import categorize_thread_data
from hang_profile_summarizer.profile import GrowToFitList, UniqueKeyedTable
from hang_profile_summarizer.summarize import summarize_profile_categories

b_1 = '20170316'
b_2 = '20170317'

s_0 = []
s_1 = ['js::RunScript(JSContext*)']
s_2 = ['js::RunScript(JSContext*)', ('js::frontend::Parser::parse()', 'xul.pdb')]
s_3 = ['mozilla::net::nsSocketTransportService::Run()', 'Unknown()', '__poll']


def simple_rows():
    return [
        (s_1, 'Gecko', b_1, 10.0, 1),
        (s_0, 'Gecko', b_1, 5.0, 1),
        (s_2, 'Gecko', b_1, 5.0, 1),
        (s_2, 'Gecko', b_2, 10.0, 2),
        (s_3, 'Gecko_Child', b_2, 8.0, 1),
        (s_3, 'Gecko_Child', b_2, 0.0, 1), # should be excluded for having no hang time
    ]


def build_profile(categorize=False):
    builder = ProfileBuilder({'uuid': 'abc'})
    builder.ingest(simple_rows(), {b_1: 1.0})
    builder.ingest([], {b_1: 2.0, b_2: 1.0})
    return builder.process_into_profile(categorize=categorize)


def test_unique_keyed_table():
    table = UniqueKeyedTable(lambda key: (key, len(key)), ('word', 'size'))
    assert table.key_to_index('foo') == 0
    assert table.key_to_index('quux') == 1
    assert table.key_to_index('foo') == 0
    assert table.index_to_item(1) == ('quux', 4)
    assert len(table) == 2
    assert table.struct_of_arrays() == {'word': ['foo', 'quux'], 'size': [3, 4], 'length': 2}

    assert UniqueKeyedTable(lambda key: (key,), ('word',)).struct_of_arrays() == {
        'word': [], 'length': 0}


def test_grow_to_fit_list():
    items = GrowToFitList()
    items[2] = 1.0
    assert list(items) == [None, None, 1.0]
    assert items[5] is None


def test_threads_and_tables():
    profile = build_profile()
    gecko, child = profile['threads']

    assert gecko['name'] == 'Gecko'
    assert gecko['processType'] == 'default'
    assert child['processType'] == 'tab'
    assert profile['uuid'] == 'abc'
    assert profile['usageHoursByDate'] == {b_1: 3.0, b_2: 1.0}

    strings = gecko['stringArray']
    names = [strings[i] for i in gecko['funcTable']['name']]
    assert names == ['js::RunScript(JSContext*)', 'js::frontend::Parser::parse()']
    assert [None if i is None else strings[i] for i in gecko['funcTable']['lib']] == [None, 'xul.pdb']
    assert gecko['stackTable'] == {'prefix': [None, 0], 'func': [0, 1], 'length': 2}

    assert gecko['sampleTable']['stack'] == [0, None, 1]
    assert gecko['sampleTable']['sampleHangMs'] == [10.0, 5.0, 15.0]
    assert 'category' not in gecko['sampleTable']

    assert gecko['dates'] == [
        {'date': b_1, 'sampleHangMs': [10.0, 5.0, 5.0], 'sampleHangCount': [1, 1, 1]},
        {'date': b_2, 'sampleHangMs': [None, None, 10.0], 'sampleHangCount': [None, None, 2]},
    ]
    assert child['dates'] == [
        {'date': b_2, 'sampleHangMs': [8.0], 'sampleHangCount': [1]},
    ]


def test_built_profile_categorizes():
    assert categorize_thread_data(build_profile()) == [
        [
            {'category': 'script', 'hangMs': 10.0},
            {'category': None, 'hangMs': 5.0},
            {'category': 'script.parse', 'hangMs': 15.0},
        ],
        [
            {'category': 'network.wait', 'hangMs': 8.0},
        ],
    ]


def test_precomputed_categories():
    profile = build_profile(categorize=True)
    gecko = profile['threads'][0]
    strings = gecko['stringArray']

    assert [None if c is None else strings[c] for c in gecko['sampleTable']['category']] == [
        'script', None, 'script.parse']
    assert summarize_profile_categories(profile) == summarize_profile_categories(build_profile())

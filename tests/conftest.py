import pytest


def make_thread(func_names, stacks, sample_stacks, sample_hang_ms=None, dates=None, name='GeckoMain'):
    """Build a processed thread by hand.

    Every function name gets one func (and one string) of the same index.
    stacks is a list of (func_index, prefix_stack_index) pairs.
    """
    num_funcs = len(func_names)
    sample_table = {
        'stack': list(sample_stacks),
        'length': len(sample_stacks),
    }
    if sample_hang_ms is not None:
        sample_table['sampleHangMs'] = list(sample_hang_ms)

    return {
        'name': name,
        'processType': 'default',
        'stringArray': list(func_names),
        'funcTable': {
            'name': list(range(num_funcs)),
            'lib': [None] * num_funcs,
            'length': num_funcs,
        },
        'stackTable': {
            'func': [func for func, _ in stacks],
            'prefix': [prefix for _, prefix in stacks],
            'length': len(stacks),
        },
        'sampleTable': sample_table,
        'dates': dates or [],
    }


@pytest.fixture
def script_thread():
    # stack 0: js::RunScript                                  -> script
    # stack 1: js::RunScript <- js::frontend::Parser::parse   -> script.parse
    return make_thread(
        ['js::RunScript(JSContext*, js::RunState&)', 'js::frontend::Parser::parse()'],
        [(0, None), (1, 0)],
        [0, None, 1],
        [10.0, 5.0, 15.0],
        dates=[
            {'date': '20170316', 'sampleHangMs': [4.0, 5.0, 5.0], 'sampleHangCount': [1, 1, 1]},
            {'date': '20170317', 'sampleHangMs': [6.0, None, 10.0], 'sampleHangCount': [1, None, 2]},
        ])


@pytest.fixture
def script_profile(script_thread):
    return {'threads': [script_thread], 'usageHoursByDate': {}, 'uuid': 'abc'}


@pytest.fixture
def thread_factory():
    return make_thread

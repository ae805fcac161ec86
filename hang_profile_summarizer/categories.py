def match_exact(symbol, pattern):
    return symbol == pattern

def match_prefix(symbol, pattern):
    return symbol.startswith(pattern)

def match_substring(symbol, pattern):
    return pattern in symbol

def match_stem(symbol, pattern):
    return symbol == pattern or symbol.startswith(pattern + '(')

def match_ignore(symbol, pattern):
    #pylint: disable=unused-argument
    return False

WAIT = 'wait'
UNCATEGORIZED = 'uncategorized'

# Returned by the function name classifier when no rule matches. Distinct from
# None (no stack) and from UNCATEGORIZED (the label used for unlabeled samples).
UNCLASSIFIED = False

# Each rule is (matches, pattern, category). Order matters, the first rule that
# matches a function name decides its category.
CATEGORIES = [
    (match_ignore, '', 'content_script'),
    (match_stem, 'mozilla::ipc::MessageChannel::WaitForSyncNotify', 'sync_ipc'),
    (match_stem, 'mozilla::ipc::MessageChannel::WaitForInterruptNotify', 'sync_ipc'),
    (match_prefix, 'mozilla::places::', 'places'),
    (match_prefix, 'mozilla::plugins::', 'plugins'),

    (match_stem, 'js::RunScript', 'script'),
    (match_stem, 'js::Nursery::collect', 'GC'),
    (match_stem, 'js::GCRuntime::collect', 'GC'),
    (match_stem, 'nsJSContext::GarbageCollectNow', 'GC'),
    (match_prefix, 'mozilla::RestyleManager::', 'restyle'),
    (match_substring, 'RestyleManager', 'restyle'),
    (match_stem, 'mozilla::PresShell::ProcessReflowCommands', 'layout'),
    (match_prefix, 'nsCSSFrameConstructor::', 'frameconstruction'),
    (match_stem, 'mozilla::PresShell::DoReflow', 'layout'),
    (match_substring, '::compileScript(', 'script'),

    (match_prefix, 'nsCycleCollector', 'CC'),
    (match_prefix, 'nsPurpleBuffer', 'CC'),
    (match_substring, 'pthread_mutex_lock', WAIT), # eg __GI___pthread_mutex_lock
    (match_prefix, 'nsRefreshDriver::IsWaitingForPaint', 'paint'), # arguable, I suppose
    (match_stem, 'mozilla::PresShell::Paint', 'paint'),
    (match_prefix, '__poll', WAIT),
    (match_prefix, '__pthread_cond_wait', WAIT),
    (match_stem, 'mozilla::PresShell::DoUpdateApproximateFrameVisibility', 'layout'), # could just as well be paint
    (match_substring, 'mozilla::net::', 'network'),
    (match_stem, 'nsInputStreamReadyEvent::Run', 'network'),

    # (match_stem, 'NS_ProcessNextEvent', 'eventloop'),
    (match_stem, 'nsJSUtil::EvaluateString', 'script'),
    (match_prefix, 'js::frontend::Parser', 'script.parse'),
    (match_prefix, 'js::jit::IonCompile', 'script.compile.ion'),
    (match_prefix, 'js::jit::BaselineCompiler::compile', 'script.compile.baseline'),

    (match_prefix, 'CompositorBridgeParent::Composite', 'paint'),
    (match_prefix, 'mozilla::layers::PLayerTransactionParent::Read(', 'messageread'),

    (match_prefix, 'mozilla::dom::', 'dom'),
    (match_prefix, 'nsDOMCSSDeclaration::', 'restyle'),
    (match_prefix, 'nsHTMLDNS', 'network'),
    (match_substring, 'IC::update(', 'script.icupdate'),
    (match_prefix, 'js::jit::CodeGenerator::link(', 'script.link'),

    (match_exact, 'base::WaitableEvent::Wait()', 'idle'),
    # TODO: mach_msg_trap under RunCurrentEventLoopInMode is really idle time,
    # which needs a caller check that these rules can't express yet.
    (match_exact, 'mach_msg_trap', WAIT),

    # Can't do this until we come up with a way of labeling ion/baseline.
    (match_prefix, 'Interpret(', 'script.execute.interpreter'),
]

def get_category_names(categories):
    names = [UNCATEGORIZED]
    seen = set(names)
    for _, _, category in categories:
        if category not in seen:
            seen.add(category)
            names.append(category)
    return names

category_names = get_category_names(CATEGORIES)

def function_name_categorizer(categories=CATEGORIES):
    # Caches every answer, including UNCLASSIFIED.
    func_name_to_category_cache = {}

    def function_name_to_category(name):
        if name in func_name_to_category_cache:
            return func_name_to_category_cache[name]

        for matches, pattern, category in categories:
            if matches(name, pattern):
                func_name_to_category_cache[name] = category
                return category

        func_name_to_category_cache[name] = UNCLASSIFIED
        return UNCLASSIFIED

    return function_name_to_category

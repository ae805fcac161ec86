import time

# Set from the job config's print_debug_info.
print_debug_info = False


def debug_dump(dump_str):
    if print_debug_info:
        print(dump_str)


def time_code(name, callback):
    print("{}...".format(name))
    start = time.time()
    result = callback()
    end = time.time()
    delta = end - start
    print("{} took {}ms to complete".format(name, int(round(delta * 1000))))
    return result


def merge_number_dicts(a, b):
    keys = set(a) | set(b)
    return {k: a.get(k, 0.) + b.get(k, 0.) for k in keys}

from hang_profile_summarizer.categories import CATEGORIES, UNCATEGORIZED
from hang_profile_summarizer.categorize import categorize_thread_data
from hang_profile_summarizer.util import time_code


def safe_divide(numerator, denominator):
    if not denominator:
        return 0.0
    return numerator / float(denominator)


def summarize_sample_categories(summary, datum):
    """Add a sample's hang time to its category and to every dotted prefix of it.

    A sample in "script.link" counts towards both "script.link" and "script".
    """
    categories = (datum['category'] or UNCATEGORIZED).split('.')

    while categories:
        category = '.'.join(categories)
        summary[category] = summary.get(category, 0.0) + datum['hangMs']
        categories.pop()
    return summary


def calculate_summary_percentages(summary):
    # Sub-categories are already counted in their top-level category.
    total = sum(samples for category, samples in summary.items() if '.' not in category)

    rows = [{
        'category': category,
        'samples': samples,
        'percentage': safe_divide(samples, total),
    } for category, samples in summary.items()]

    # Ties are broken by name so identical input always sorts the same way.
    return sorted(rows, key=lambda row: (-row['samples'], row['category']))


def summarize_thread_categories(categories):
    summary = {}
    for datum in categories:
        summarize_sample_categories(summary, datum)
    return calculate_summary_percentages(summary)


def summarize_categories(profile, thread_categories):
    """Return, per thread, its categories sorted by hang time with percentages."""
    #pylint: disable=unused-argument
    return [summarize_thread_categories(categories) for categories in thread_categories]


def calculate_rolling_summary(thread, categories):
    rolling_summary = []
    max_time = 0.0

    for date in thread.get('dates', []):
        total_time = 0.0
        samples = {}

        for i, hang_ms in enumerate(date['sampleHangMs']):
            if hang_ms is None:
                continue
            category = None
            if i < len(categories):
                category = categories[i]['category']
            category = category or UNCATEGORIZED
            samples[category] = samples.get(category, 0.0) + hang_ms
            total_time += hang_ms

        if samples:
            max_time = max(max_time, max(samples.values()))

        rolling_summary.append({
            'date': date.get('date'),
            'samples': samples,
            'totalTime': total_time,
        })

    # Every bucket shares one scale so graph heights are comparable across dates.
    for segment in rolling_summary:
        segment['percentage'] = {category: safe_divide(time, max_time)
                                 for category, time in segment['samples'].items()}

    return rolling_summary


def calculate_rolling_summaries(profile, thread_categories):
    return [calculate_rolling_summary(thread, thread_categories[i])
            for i, thread in enumerate(profile['threads'])]


def summarize_profile_categories(profile, categories=CATEGORIES):
    """Categorize and summarize every thread of profile.

    Returns one dict per thread holding its index, name and process type, its
    rolling summary by date and its overall category summary.
    """
    def summarize():
        thread_categories = categorize_thread_data(profile, categories)
        rolling_summaries = calculate_rolling_summaries(profile, thread_categories)
        summaries = summarize_categories(profile, thread_categories)

        return [{
            'threadIndex': i,
            'threadName': thread.get('name'),
            'processType': thread.get('processType'),
            'rollingSummary': rolling_summaries[i],
            'summary': summaries[i],
        } for i, thread in enumerate(profile['threads'])]

    return time_code("Summarizing profile categories", summarize)

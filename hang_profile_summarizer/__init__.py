from hang_profile_summarizer.categories import CATEGORIES, category_names
from hang_profile_summarizer.categorize import categorize_thread_data, sample_categorizer
from hang_profile_summarizer.summarize import (calculate_rolling_summaries, summarize_categories,
                                               summarize_profile_categories)

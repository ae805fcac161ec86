import sys

from hang_profile_summarizer import main

if __name__ == "__main__":
    config = {'print_summary': True}
    if len(sys.argv) > 1:
        config['profile_in_filename'] = sys.argv[1]

    main.summary_job(config)

import contextlib
import gzip
import io
import os
import urllib.request
import uuid
import zlib
from datetime import datetime

import ujson as json
import boto3
from boto3.s3.transfer import S3Transfer

from hang_profile_summarizer import util
from hang_profile_summarizer.categories import category_names
from hang_profile_summarizer.summarize import summarize_profile_categories
from hang_profile_summarizer.util import time_code


default_config = {
    'profile_in_filename': 'hang_profile_128_16000',
    'summary_out_filename': None,
    'read_files_from_network': False,
    'analysis_output_url': 'https://analysis-output.telemetry.mozilla.org/',
    'append_date': False,
    'use_s3': False,
    's3_bucket': 'telemetry-public-analysis-2',
    's3_prefix': 'bhr/data/hang_aggregates/',
    'print_debug_info': False,
    'print_summary': False,
    'uuid': uuid.uuid4().hex,
}


def get_final_config(config=None):
    final_config = {}
    final_config.update(default_config)

    if config is not None:
        final_config.update(config)

    if final_config['summary_out_filename'] is None:
        final_config['summary_out_filename'] = final_config['profile_in_filename'] + '_summary'

    return final_config


def fetch_URL(url):
    # Tries twice before giving up.
    for _ in range(2):
        try:
            with contextlib.closing(urllib.request.urlopen(url)) as response:
                #pylint: disable=no-member
                if response.getcode() == 404:
                    return False, ""
                if response.getcode() == 200:
                    return True, decode_response(response)
        except IOError:
            pass
    return False, ""


def decode_response(response):
    headers = response.info()
    content_encoding = headers.get("Content-Encoding", "").lower()
    data = response.read()
    if content_encoding in ("gzip", "x-gzip", "deflate"):
        try:
            with gzip.GzipFile(fileobj=io.BytesIO(data)) as f:
                return f.read().decode('utf-8')
        except (OSError, EOFError):
            return zlib.decompress(data).decode('utf-8')
    return data.decode('utf-8')


def get_local_filename(name, config):
    if config['append_date']:
        end_date_str = datetime.today().strftime("%Y%m%d")
        return "./output/%s-%s.json.gz" % (name, end_date_str)
    return "./output/%s.json.gz" % name


def read_file(name, config):
    if config['read_files_from_network']:
        url = config['analysis_output_url'] + config['s3_prefix'] + name + ".json"
        success, response = fetch_URL(url)
        if not success:
            raise Exception('Could not find file at url: ' + url)
        return json.loads(response)

    with gzip.open(get_local_filename(name, config), 'rt', encoding='utf-8') as f:
        return json.loads(f.read())


def write_file(name, stuff, config):
    gzfilename = get_local_filename(name, config)
    jsonblob = json.dumps(stuff, ensure_ascii=False)

    if not os.path.exists('./output'):
        os.makedirs('./output')
    with gzip.open(gzfilename, 'wt', encoding='utf-8') as f:
        f.write(jsonblob)

    if config['use_s3']:
        bucket = config['s3_bucket']
        s3_key = config['s3_prefix'] + name + ".json"
        client = boto3.client('s3', 'us-west-2')
        transfer = S3Transfer(client)
        extra_args = {'ContentType': 'application/json', 'ContentEncoding': 'gzip'}
        transfer.upload_file(gzfilename,
                             bucket,
                             s3_key,
                             extra_args=extra_args)
        if config['uuid'] is not None:
            s3_uuid_key = config['s3_prefix'] + name + "_" + config['uuid'] + ".json"
            transfer.upload_file(gzfilename,
                                 bucket,
                                 s3_uuid_key,
                                 extra_args=extra_args)

    return gzfilename


def format_thread_summary(thread_summary):
    lines = [
        "{} Thread, {} process".format(thread_summary['threadName'],
                                       thread_summary.get('processType')),
        "{:<40} {:>14} {:>10}".format("Category", "Hang ms", "% hang"),
    ]
    for row in thread_summary['summary']:
        lines.append("{:<40} {:>14.1f} {:>9.1f}%".format(row['category'],
                                                          row['samples'],
                                                          row['percentage'] * 100))
    return "\n".join(lines)


def summary_job(config=None):
    """Read a processed hang profile, summarize its categories and write the result."""
    final_config = get_final_config(config)
    util.print_debug_info = final_config['print_debug_info']
    try:
        profile = time_code("Reading profile",
                            lambda: read_file(final_config['profile_in_filename'], final_config))
        summaries = summarize_profile_categories(profile)
    finally:
        util.print_debug_info = False

    if final_config['print_summary']:
        for thread_summary in summaries:
            print(format_thread_summary(thread_summary))
            print("")

    result = {
        'categoryNames': category_names,
        'summaries': summaries,
        'uuid': final_config['uuid'],
    }
    time_code("Writing summary",
              lambda: write_file(final_config['summary_out_filename'], result, final_config))
    return result

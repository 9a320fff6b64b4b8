#!/usr/bin/env python

import os
from collections import namedtuple
from urllib.parse import urlparse

BAM_FILE_EXTENSION = '.bam'
BAM_INDEX_SUFFIX = '.bai'
REMOTE_SCHEMES = ('http', 'https', 'ftp', 's3', 'gs', 'file')

RemoteInput = namedtuple('RemoteInput', ['url'])
LocalInput = namedtuple('LocalInput', ['path'])


def resolve_input(input_location, remote_schemes=REMOTE_SCHEMES):
    ''' Classify the user's INPUT as a remote URL or a local file path.

    Anything that does not parse as an absolute URL with a known scheme is
    treated as a path; nothing is checked for existence here.

    Returns:
        RemoteInput or LocalInput
    '''
    try:
        parsed = urlparse(input_location)
    except ValueError:
        return LocalInput(input_location)
    scheme = parsed.scheme.lower()
    if scheme in [s.lower() for s in remote_schemes] and \
       (parsed.netloc or scheme == 'file'):
        return RemoteInput(input_location)
    return LocalInput(input_location)


def base_file_name(bam_input):
    if isinstance(bam_input, RemoteInput):
        path = urlparse(bam_input.url).path
        return path[path.rfind('/') + 1:]
    return os.path.abspath(bam_input.path)


def derive_output_path(
        bam_input,
        output_fp=None,
        bam_extension=BAM_FILE_EXTENSION,
        index_suffix=BAM_INDEX_SUFFIX):
    ''' Work out where the index goes.

    Args:
        bam_input: a RemoteInput or LocalInput from resolve_input.
        output_fp: the user's OUTPUT, returned untouched when given.
    Returns:
        x.bai for x.bam, otherwise the full input name with .bai appended.
        URL inputs land in the current directory; local inputs land next to
        the BAM.
    '''
    if output_fp:
        return output_fp
    base_name = base_file_name(bam_input)
    if bam_extension and base_name.endswith(bam_extension):
        return base_name[:-len(bam_extension)] + index_suffix
    return base_name + index_suffix

#!/usr/bin/env python

import os
from contextlib import contextmanager

from bamindex.errors import (
    OutputNotWritable, InputNotReadable, WrongContainerType, UnsortedInput)
from bamindex.inputs import RemoteInput

BAM_FORMAT = 'BAM'
COORDINATE_ORDER = 'coordinate'
UNSORTED_ORDER = 'unsorted'


class ResolvedInput(object):
    def __init__(self, reader, source, remote=False):
        """
        An open alignment reader plus the location it was opened from.
        """
        self.reader = reader
        self.source = source
        self.remote = remote
        self.closed = False

    @property
    def container_type(self):
        return str(self.reader.format).upper()

    @property
    def sort_order(self):
        header = self.reader.header.to_dict()
        return header.get('HD', {}).get('SO', UNSORTED_ORDER)

    def close(self):
        if not self.closed:
            self.closed = True
            self.reader.close()


def assert_file_is_writable(fp):
    if os.path.exists(fp):
        if os.path.isdir(fp):
            raise OutputNotWritable(
                'Cannot write file because it is a directory: {}'.format(fp))
        if not os.access(fp, os.W_OK):
            raise OutputNotWritable(
                'File exists but is not writable: {}'.format(fp))
        return
    parent = os.path.dirname(os.path.abspath(fp))
    if not os.path.isdir(parent):
        raise OutputNotWritable(
            'Cannot write file {}; directory {} does not exist.'.format(
                fp, parent))
    if not os.access(parent, os.W_OK | os.X_OK):
        raise OutputNotWritable(
            'Cannot write file {}; directory {} is not writable.'.format(
                fp, parent))


def assert_file_is_readable(fp):
    if not os.path.exists(fp):
        raise InputNotReadable('Cannot read non-existent file: {}'.format(fp))
    if os.path.isdir(fp):
        raise InputNotReadable(
            'Cannot read file because it is a directory: {}'.format(fp))
    if not os.access(fp, os.R_OK):
        raise InputNotReadable('File exists but is not readable: {}'.format(fp))


def _open_reader(opener, source, reference_filename, lazy):
    try:
        return opener.open(
            source, reference_filename=reference_filename, lazy=lazy)
    except ValueError as e:
        raise WrongContainerType(
            'Input is not an alignment file: {} ({})'.format(source, e)) from e
    except OSError as e:
        raise InputNotReadable(
            'Could not open input {}: {}'.format(source, e)) from e


def open_input(bam_input, opener, reference_filename=None):
    ''' Open the BAM header, lazily for remote sources. '''
    if isinstance(bam_input, RemoteInput):
        reader = _open_reader(
            opener, bam_input.url, reference_filename, lazy=True)
        return ResolvedInput(reader, bam_input.url, remote=True)
    assert_file_is_readable(bam_input.path)
    reader = _open_reader(
        opener, bam_input.path, reference_filename, lazy=False)
    return ResolvedInput(reader, bam_input.path)


def check_container_type(resolved):
    if resolved.container_type != BAM_FORMAT:
        raise WrongContainerType(
            'Input file must be bam file, not {} file: {}'.format(
                resolved.container_type.lower(), resolved.source))


def check_sort_order(resolved):
    if resolved.sort_order != COORDINATE_ORDER:
        raise UnsortedInput(
            'Input bam file must be sorted by coordinate, not {}: {}'.format(
                resolved.sort_order, resolved.source))


@contextmanager
def validated_input(bam_input, output_fp, opener, reference_filename=None):
    ''' Check preconditions and yield an open, coordinate-sorted BAM.

    The output location is checked before anything is opened. The reader is
    closed when the block exits, however it exits.

    Args:
        bam_input: RemoteInput or LocalInput.
        output_fp: where the index will be written.
        opener: object with open(source, reference_filename, lazy).
        reference_filename: FASTA passed through to the opener.
    Yields:
        ResolvedInput
    '''
    assert_file_is_writable(output_fp)
    resolved = open_input(bam_input, opener, reference_filename)
    try:
        check_container_type(resolved)
        check_sort_order(resolved)
        yield resolved
    finally:
        resolved.close()

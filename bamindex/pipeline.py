#!/usr/bin/env python

import os
import sys

from configobj import ConfigObj, ConfigObjError

from bamindex.errors import ConfigError
from bamindex.indexer import PysamOpener, PysamIndexBuilder, index_bam
from bamindex.inputs import (
    BAM_FILE_EXTENSION, BAM_INDEX_SUFFIX, REMOTE_SCHEMES,
    resolve_input, derive_output_path)
from bamindex.preconditions import validated_input

DEFAULT_CONFIG_FP = os.path.join(
    os.path.dirname(__file__), '../docs/bamindex.conf')


class Logger(object):
    def __init__(self, logfile=None, verbose=True):
        """
        A simple logger.
        """
        self.console = sys.stdout
        self.verbose = verbose
        if logfile is not None:
            self.log = open(logfile, 'w')
        else:
            self.log = None

    def write(self, message):
        if self.verbose:
            self.console.write(message + '\n')
        if self.log is not None:
            self.log.write(message + '\n')
            self.log.flush()

    def close(self):
        if self.log is not None:
            self.log.close()
            self.log = None


class BAMIndexConfig:
    def __init__(self, config_fp=None):
        if config_fp is None:
            config_fp = DEFAULT_CONFIG_FP
        elif not os.path.isfile(config_fp):
            raise ConfigError('Config file not found: {}'.format(config_fp))
        try:
            config = ConfigObj(config_fp, file_error=False)
        except (ConfigObjError, OSError) as e:
            raise ConfigError(
                'Could not read config file {}: {}'.format(config_fp, e))
        defaults = config.get('Defaults', {})
        self.bam_extension = defaults.get(
            'BAM_FILE_EXTENSION', BAM_FILE_EXTENSION)
        self.index_suffix = defaults.get('INDEX_SUFFIX', BAM_INDEX_SUFFIX)
        if not self.index_suffix.endswith(BAM_INDEX_SUFFIX):
            raise ConfigError(
                'INDEX_SUFFIX must end with {}; samtools writes BAI '
                'indexes: {}'.format(BAM_INDEX_SUFFIX, self.index_suffix))
        schemes = defaults.get('REMOTE_SCHEMES', list(REMOTE_SCHEMES))
        if isinstance(schemes, str):
            schemes = [schemes]
        self.remote_schemes = [
            s.strip().lower() for s in schemes if s.strip()]
        self.log_file = defaults.get('LOG_FILE') or None


def build_bam_index(
        input_location,
        output_fp=None,
        reference_sequence=None,
        config=None,
        logger=None,
        opener=None,
        builder=None):
    ''' Write a .bai index for a coordinate-sorted BAM file or URL.

    Args:
        input_location: local path or URL of the BAM.
        output_fp: index destination; derived from input_location when None.
        reference_sequence: FASTA handed to the reader unchanged.
        config: BAMIndexConfig; the packaged defaults when None.
        opener, builder: alignment reader factory and index builder,
            pysam-backed when None.
    Returns:
        The path the index was written to.
    '''
    if config is None:
        config = BAMIndexConfig()
    if logger is None:
        logger = Logger()
    if opener is None:
        opener = PysamOpener()
    if builder is None:
        builder = PysamIndexBuilder()

    bam_input = resolve_input(input_location, config.remote_schemes)
    output_fp = derive_output_path(
        bam_input, output_fp, config.bam_extension, config.index_suffix)
    with validated_input(
            bam_input, output_fp, opener, reference_sequence) as resolved:
        index_bam(resolved, output_fp, builder, logger)
    return output_fp

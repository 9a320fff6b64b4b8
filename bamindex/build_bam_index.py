#!/usr/bin/env python

import argparse
import sys

from bamindex.pipeline import BAMIndexConfig, Logger, build_bam_index
from bamindex.errors import BAMIndexError

USAGE_SUMMARY = 'Generates a BAM index ".bai" file.'
USAGE_DETAILS = '''This tool creates an index file for the input BAM that allows
fast look-up of data in a BAM file, like an index on a database. Note that this
tool cannot be run on SAM files, and that the input BAM file must be sorted in
coordinate order.

Usage example:
    build_bam_index -i input.bam'''


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=USAGE_SUMMARY + '\n\n' + USAGE_DETAILS)
    parser.add_argument(
        '-i', '--input', required=True,
        help='''A BAM file or URL to process. Must be sorted in coordinate
        order.''')
    parser.add_argument(
        '-o', '--output',
        help='''The BAM index file. Defaults to x.bai if INPUT is x.bam,
        otherwise INPUT.bai. If INPUT is a URL and OUTPUT is unspecified,
        defaults to a file in the current directory.''')
    parser.add_argument(
        '-R', '--reference-sequence',
        help='Reference sequence FASTA, passed through to the BAM reader.')
    parser.add_argument(
        '-c', '--config', default=None,
        help='The configuration file to be used in this instance (default: docs/bamindex.conf)')
    parser.add_argument(
        '-l', '--log-file',
        help='Also write log output to this file (default: LOG_FILE from the config file).')
    parser.add_argument(
        '-q', '--quiet', action='store_true', default=False,
        help='Do not write log output to the console.')
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    try:
        config = BAMIndexConfig(args.config)
        logger = Logger(
            logfile=args.log_file or config.log_file, verbose=not args.quiet)
    except (BAMIndexError, OSError) as e:
        sys.exit('FATAL: {}'.format(e))
    try:
        build_bam_index(
            args.input,
            output_fp=args.output,
            reference_sequence=args.reference_sequence,
            config=config,
            logger=logger)
    except BAMIndexError as e:
        sys.exit('FATAL: {}'.format(e))
    finally:
        logger.close()
    return 0


if __name__ == '__main__':
    sys.exit(main())

#!/usr/bin/env python

import pysam
from pysam.utils import SamtoolsError

from bamindex.errors import BuildFailure


class PysamOpener(object):
    def open(self, source, reference_filename=None, lazy=False):
        """
        Open a SAM/BAM/CRAM in auto-detect read mode. htslib parses only
        the header here and decodes records as they are iterated, so every
        open is already lazy; the flag needs no extra option. Headers
        without @SQ lines are accepted for local and remote sources alike.
        """
        return pysam.AlignmentFile(
            source, 'r',
            reference_filename=reference_filename,
            check_sq=False)


class PysamIndexBuilder(object):
    def build(self, resolved, output_fp):
        """
        Run samtools index on the source the input was opened from.
        """
        try:
            pysam.index(resolved.source, output_fp)
        except SamtoolsError as e:
            raise BuildFailure(str(e)) from e


def index_bam(resolved, output_fp, builder, logger):
    ''' Hand a validated BAM to the index builder.

    Builder errors propagate as raised; closing the input belongs to the
    block that opened it.
    '''
    builder.build(resolved, output_fp)
    logger.write('Successfully wrote BAM index file {}'.format(output_fp))

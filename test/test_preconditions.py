import os
import unittest

import create_test_data as test
from bamindex.errors import (
    OutputNotWritable, InputNotReadable, WrongContainerType, UnsortedInput)
from bamindex.inputs import LocalInput, RemoteInput
from bamindex.preconditions import (
    ResolvedInput, assert_file_is_writable, assert_file_is_readable,
    validated_input)


class PreconditionTest(unittest.TestCase):
    def setUp(self):
        self.test_dir = test.create_test_dir()
        self.bam_fp = test.touch(self.test_dir, 'sample.bam')
        self.output_fp = os.path.join(self.test_dir, 'sample.bai')

    def test_output_in_missing_directory(self):
        with self.assertRaises(OutputNotWritable):
            assert_file_is_writable(
                os.path.join(self.test_dir, 'missing', 'sample.bai'))

    def test_output_is_directory(self):
        with self.assertRaises(OutputNotWritable):
            assert_file_is_writable(self.test_dir)

    def test_output_may_already_exist(self):
        assert_file_is_writable(test.touch(self.test_dir, 'old.bai'))

    def test_input_missing_or_directory(self):
        with self.assertRaises(InputNotReadable):
            assert_file_is_readable(os.path.join(self.test_dir, 'none.bam'))
        with self.assertRaises(InputNotReadable):
            assert_file_is_readable(self.test_dir)

    def test_unwritable_output_checked_before_open(self):
        opener = test.FakeOpener()
        with self.assertRaises(OutputNotWritable):
            with validated_input(
                    LocalInput(self.bam_fp),
                    os.path.join(self.test_dir, 'missing', 'sample.bai'),
                    opener):
                pass
        self.assertEqual(opener.calls, [])

    def test_unreadable_input_checked_before_open(self):
        opener = test.FakeOpener()
        with self.assertRaises(InputNotReadable):
            with validated_input(
                    LocalInput(os.path.join(self.test_dir, 'none.bam')),
                    self.output_fp, opener):
                pass
        self.assertEqual(opener.calls, [])

    def test_local_input_opened_eagerly(self):
        opener = test.FakeOpener()
        with validated_input(
                LocalInput(self.bam_fp), self.output_fp, opener,
                reference_filename='ref.fa') as resolved:
            self.assertEqual(resolved.source, self.bam_fp)
            self.assertFalse(resolved.remote)
            self.assertFalse(resolved.closed)
        self.assertEqual(opener.calls, [{
            'source': self.bam_fp,
            'reference_filename': 'ref.fa',
            'lazy': False}])
        self.assertEqual(opener.readers[0].close_count, 1)

    def test_remote_input_opened_lazily(self):
        url = 'https://example.org/data/sample.bam'
        opener = test.FakeOpener()
        with validated_input(
                RemoteInput(url), self.output_fp, opener) as resolved:
            self.assertTrue(resolved.remote)
            self.assertEqual(resolved.source, url)
        self.assertTrue(opener.calls[0]['lazy'])
        self.assertEqual(opener.readers[0].close_count, 1)

    def test_sam_and_cram_rejected(self):
        for fmt in ['SAM', 'CRAM']:
            opener = test.FakeOpener(fmt=fmt)
            with self.assertRaises(WrongContainerType):
                with validated_input(
                        LocalInput(self.bam_fp), self.output_fp, opener):
                    self.fail('validation should not yield')
            self.assertEqual(opener.readers[0].close_count, 1)

    def test_only_coordinate_order_accepted(self):
        for sort_order in ['unsorted', 'queryname', 'unknown',
                           'Coordinate', None]:
            opener = test.FakeOpener(sort_order=sort_order)
            with self.assertRaises(UnsortedInput):
                with validated_input(
                        LocalInput(self.bam_fp), self.output_fp, opener):
                    self.fail('validation should not yield')
            self.assertEqual(opener.readers[0].close_count, 1)

    def test_reader_closed_once_when_block_raises(self):
        opener = test.FakeOpener()
        with self.assertRaises(RuntimeError):
            with validated_input(
                    LocalInput(self.bam_fp), self.output_fp,
                    opener) as resolved:
                resolved.close()
                raise RuntimeError('interrupted')
        self.assertEqual(opener.readers[0].close_count, 1)

    def test_non_alignment_file_rejected(self):
        error = ValueError('file does not contain alignment data')
        opener = test.FakeOpener(error=error)
        with self.assertRaises(WrongContainerType) as raised:
            with validated_input(
                    LocalInput(self.bam_fp), self.output_fp, opener):
                self.fail('validation should not yield')
        self.assertIs(raised.exception.__cause__, error)
        self.assertIn(self.bam_fp, str(raised.exception))
        self.assertEqual(opener.readers, [])

    def test_unreachable_remote_input(self):
        url = 'https://example.org/data/sample.bam'
        error = OSError('could not open alignment file')
        opener = test.FakeOpener(error=error)
        with self.assertRaises(InputNotReadable) as raised:
            with validated_input(RemoteInput(url), self.output_fp, opener):
                self.fail('validation should not yield')
        self.assertIs(raised.exception.__cause__, error)
        self.assertIn(url, str(raised.exception))

    @unittest.skipIf(
        hasattr(os, 'geteuid') and os.geteuid() == 0,
        'root ignores file permissions')
    def test_read_only_output_rejected(self):
        output_fp = test.touch(self.test_dir, 'old.bai')
        os.chmod(output_fp, 0o444)
        try:
            with self.assertRaises(OutputNotWritable):
                assert_file_is_writable(output_fp)
        finally:
            os.chmod(output_fp, 0o644)

    @unittest.skipIf(
        hasattr(os, 'geteuid') and os.geteuid() == 0,
        'root ignores file permissions')
    def test_read_only_directory_rejected(self):
        read_only_dir = os.path.join(self.test_dir, 'locked')
        os.mkdir(read_only_dir, 0o555)
        try:
            with self.assertRaises(OutputNotWritable):
                assert_file_is_writable(
                    os.path.join(read_only_dir, 'sample.bai'))
        finally:
            os.chmod(read_only_dir, 0o755)

    def test_resolved_input_reads_header(self):
        resolved = ResolvedInput(
            test.FakeReader(fmt='bam', sort_order=None), 'x.bam')
        self.assertEqual(resolved.container_type, 'BAM')
        self.assertEqual(resolved.sort_order, 'unsorted')

    def tearDown(self):
        test.remove_test_dir(self.test_dir)


if __name__ == '__main__':
    unittest.main()

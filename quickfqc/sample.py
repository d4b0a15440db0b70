"""The per file sample and the pipeline that fills it in.

A Sample is an immutable record. Each stage of the pipeline returns a new Sample with more of
its fields filled in:

  check_file      unchecked -> file-checked -> decoded -> validated
  extract_sample  validated -> extracted
  compute_sample  extracted -> computed

A file that fails a check is returned with the corresponding flag left False and goes no further.
"""
from collections import namedtuple
import os
import zlib
import logging

from quickfqc.lib.fastq import is_gzipped, is_readable, read_lines, is_fastq, extract_fields
from quickfqc.stats import (decode_and_reduce, length_quartiles, quality_quartiles, duplication_level,
                            is_long_read, EmptySampleError)


logger = logging.getLogger(__name__)

__default_sample_size__ = 100000
__validation_records__ = 3
__plot_width__ = 140
__plot_height__ = 60

# Errors that mean "we could not read this file", as opposed to bugs
io_errors = (OSError, EOFError, UnicodeDecodeError, zlib.error)


Sample = namedtuple('Sample', [
  'fname',
  'sample_size',
  'is_file',
  'gzipped',
  'is_readable',
  'is_fastq',
  'processed',
  'long_reads',
  'sequences',
  'qualities',
  'mean_qualities',
  'length',
  'quality',
  'duplication_level',
  'plot_width',
  'plot_height'
])


class NoValidInputError(RuntimeError):
  """None of the inputs could be processed"""
  pass


def new_sample(fname, sample_size=__default_sample_size__, plot_width=__plot_width__, plot_height=__plot_height__):
  if sample_size < 1:
    raise ValueError('Sample size must be at least 1 (got {})'.format(sample_size))
  return Sample(
    fname=fname, sample_size=sample_size,
    is_file=False, gzipped=False, is_readable=False, is_fastq=False, processed=False, long_reads=False,
    sequences=None, qualities=None, mean_qualities=None,
    length=None, quality=None, duplication_level=None,
    plot_width=plot_width, plot_height=plot_height)


def stage(sample):
  if sample.processed: return 'computed'
  if sample.sequences is not None: return 'extracted'
  if sample.is_fastq: return 'validated'
  if sample.is_readable: return 'decoded'
  if sample.is_file: return 'file-checked'
  return 'unchecked'


def passed_checks(sample):
  return sample.is_file and sample.is_readable and sample.is_fastq


def check_file(fname, sample_size=__default_sample_size__, **kwargs):
  """Run the file, encoding, readability and format checks on a path

  :param fname: path to the file
  :param sample_size: number of records we will sample later
  :param kwargs: passed on to new_sample
  :return: Sample with the check flags set
  """
  s = new_sample(fname, sample_size, **kwargs)
  if not os.path.isfile(fname):
    logger.info('{} is not a file. Skipping.'.format(fname))
    return s
  s = s._replace(is_file=True)

  try:
    s = s._replace(gzipped=is_gzipped(fname))
  except (OSError, EOFError) as e:
    logger.info('Could not determine encoding of {} ({}). Skipping.'.format(fname, e))
    return s
  logger.debug('{}: {} encoding'.format(fname, 'gzip' if s.gzipped else 'plain text'))

  if not is_readable(fname, s.gzipped):
    logger.info('{} can not be read as text. Skipping.'.format(fname))
    return s
  s = s._replace(is_readable=True)

  try:
    lines = read_lines(fname, s.gzipped, __validation_records__)
  except io_errors as e:
    logger.info('Could not read the first records of {} ({}). Skipping.'.format(fname, e))
    return s
  if not is_fastq(lines):
    logger.info("{} is not a FASTQ file (we test for '@' on the first line and '+' on the third). "
                "Skipping.".format(fname))
    return s
  return s._replace(is_fastq=True)


def extract_sample(sample, threads=1):
  """Read the first sample_size records and decode the quality strings

  :param sample: a Sample that passed all checks
  :param threads: processes to use for decoding
  :return: Sample with sequences, qualities and mean_qualities filled in
  """
  if not passed_checks(sample):
    raise RuntimeError('{} has not passed the file checks (stage: {})'.format(sample.fname, stage(sample)))
  lines = read_lines(sample.fname, sample.gzipped, sample.sample_size)
  seqs, qual_lines = extract_fields(lines, sample.sample_size)
  if len(seqs) < sample.sample_size:
    logger.debug('{} has only {} records'.format(sample.fname, len(seqs)))
  dq = decode_and_reduce(qual_lines, threads=threads)
  if dq.out_of_range:
    logger.warning('{}: {} quality characters below "!" were scored as 0'.format(sample.fname, dq.out_of_range))
  return sample._replace(sequences=seqs, qualities=dq.qualities, mean_qualities=dq.mean_qualities)


def compute_sample(sample):
  """Quartiles, read mode and duplication level for an extracted sample"""
  if sample.sequences is None:
    raise RuntimeError('{} has not been extracted yet (stage: {})'.format(sample.fname, stage(sample)))
  if len(sample.sequences) == 0:
    raise EmptySampleError('{} passed the FASTQ checks but has no complete records'.format(sample.fname))
  length = length_quartiles(sample.sequences)
  return sample._replace(
    length=length,
    long_reads=is_long_read(length.max),
    quality=quality_quartiles(sample.mean_qualities),
    duplication_level=duplication_level(sample.sequences),
    processed=True)


def process_sample(sample, threads=1):
  return compute_sample(extract_sample(sample, threads=threads))


def check_files(fnames, sample_size=__default_sample_size__, **kwargs):
  """Run the checks on every input and keep the ones that pass, in input order

  :param fnames: list of paths
  :param sample_size: records to sample per file
  :param kwargs: passed on to new_sample
  :return: list of Samples that passed the checks
  """
  checked = [check_file(fname, sample_size, **kwargs) for fname in fnames]
  valid = [s for s in checked if passed_checks(s)]
  logger.debug('{} of {} inputs are FASTQ files'.format(len(valid), len(checked)))
  if not valid:
    raise NoValidInputError('None of the {} input(s) is a readable FASTQ file'.format(len(fnames)))
  return valid


def process_checked(samples, threads=1):
  """Sample and summarize checked files.

  With a single file any read error is raised. With several, a file that fails part way
  is logged and dropped so the others still get summarized.

  :param samples: output of check_files
  :param threads: processes to use for per read work
  :return: list of computed Samples, in input order
  """
  if len(samples) == 1:
    return [process_sample(samples[0], threads=threads)]

  done = []
  for s in samples:
    try:
      done.append(process_sample(s, threads=threads))
    except io_errors + (EmptySampleError,) as e:
      logger.error('Dropping {}: {}'.format(s.fname, e))
  if not done:
    raise NoValidInputError('None of the {} FASTQ file(s) could be summarized'.format(len(samples)))
  return done

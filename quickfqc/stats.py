"""Summary statistics over a sample of reads: length and quality quartiles, duplication and
the point series we chart.

Decoding quality strings and taking per-read means is the expensive part. The quality lines are
split into shards which are mapped over a process pool (or in process, for threads=1) and the
shard results are stitched back together in order, so per-read indices stay aligned with the
sequence list.

A note on the median: we take the element half way along the sample as read from the file. The
sample is not sorted first, so this is not the statistical median. Summaries produced by earlier
versions of the tool use this definition and we keep it so numbers stay comparable.
"""
from collections import namedtuple
from multiprocessing import Pool
import time
import logging

import cytoolz
import numpy as np

from quickfqc.lib import phred


logger = logging.getLogger(__name__)

__dup_truncate_len__ = 50
__max_dup_bin__ = 10
__long_read_threshold__ = 1000
__long_read_step__ = 10
__shard_size__ = 10000

Quartiles = namedtuple('Quartiles', ['min', 'median', 'mean', 'max'])
DecodedQualities = namedtuple('DecodedQualities', ['qualities', 'mean_qualities', 'out_of_range'])


class EmptySampleError(RuntimeError):
  """Raised when there are no reads to summarize"""
  pass


def positional_median(values):
  """Element at len // 2 of values, as ordered"""
  return values[len(values) // 2]


def quartiles(values, what='values'):
  """min, (positional) median, truncated mean and max of a sequence of ints

  :param values: list or array of non-negative ints
  :param what: what the values are, for the error message
  :return: Quartiles
  """
  if len(values) == 0:
    raise EmptySampleError('Can not summarize an empty set of {}'.format(what))
  v = np.asarray(values, dtype=np.int64)
  return Quartiles(
    min=int(v.min()),
    median=int(positional_median(v)),
    mean=int(v.sum() // len(v)),
    max=int(v.max()))


def read_lengths(sequences):
  return np.fromiter(map(len, sequences), dtype=np.int64, count=len(sequences))


def length_quartiles(sequences):
  return quartiles(read_lengths(sequences), 'read lengths')


def mean_qualities(qualities):
  """Truncated mean score of each read. A read with an empty quality string scores 0.

  :param qualities: list of per read score arrays
  :return: np.array of ints, one per read
  """
  return np.array([q.sum() // len(q) if len(q) else 0 for q in qualities], dtype=np.int64)


def quality_quartiles(mean_quals):
  """Quartiles over the per read mean qualities"""
  return quartiles(mean_quals, 'read qualities')


def truncate_reads(sequences, length=__dup_truncate_len__):
  return [s[:length] for s in sequences]


def duplication_level(sequences, length=__dup_truncate_len__):
  """Percentage of reads that are unique after truncation. 100.0 means no duplicates at all.

  :param sequences: list of read sequences
  :param length: compare only this many leading bases
  :return: float in (0, 100]
  """
  if len(sequences) == 0:
    raise EmptySampleError('Can not compute duplication for an empty sample')
  trunc = truncate_reads(sequences, length)
  return len(set(trunc)) / len(trunc) * 100.0


def duplication_histogram(sequences, length=__dup_truncate_len__, max_occurrence=__max_dup_bin__):
  """How many distinct (truncated) reads occur x times, for x >= 2.

  Reads seen more than max_occurrence times all go in the max_occurrence bin.

  :param sequences:
  :param length:
  :param max_occurrence:
  :return: sorted list of (x, number of distinct reads seen x times). Empty if nothing is duplicated
  """
  occurrences = [
    min(cnt, max_occurrence)
    for cnt in cytoolz.frequencies(truncate_reads(sequences, length)).values()
    if cnt > 1
  ]
  return sorted(cytoolz.frequencies(occurrences).items())


def is_long_read(max_length, threshold=__long_read_threshold__):
  return max_length >= threshold


def position_step(long_reads):
  return __long_read_step__ if long_reads else 1


def position_sums(qualities):
  """For each base position, how many reads reach it and the sum of their scores there

  :param qualities: list of per read score arrays
  :return: counts, sums - two int arrays as long as the longest read
  """
  lengths = np.fromiter(map(len, qualities), dtype=np.int64, count=len(qualities))
  max_len = int(lengths.max()) if len(lengths) else 0
  # reads reaching position p are the reads longer than p
  counts = np.cumsum(np.bincount(lengths, minlength=max_len + 1)[::-1])[::-1][1:]
  sums = np.zeros(max_len, dtype=np.int64)
  for q in qualities:
    sums[:len(q)] += q
  return counts, sums


def quality_by_position(qualities, max_length, step=1):
  """Mean score at base positions 0, step, 2 * step ... < max_length

  :param qualities: list of per read score arrays
  :param max_length: longest read length in the sample
  :param step: 1 for short reads, 10 for long reads
  :return: list of (1 based position, mean score). Positions no read reaches are left out
  """
  counts, sums = position_sums(qualities)
  return [
    (p + 1, sums[p] / counts[p])
    for p in range(0, max_length, step)
    if p < len(counts) and counts[p] > 0
  ]


def mean_quality_distribution(mean_quals):
  """(mean quality, number of reads) pairs, sorted by quality"""
  return sorted(cytoolz.frequencies(int(q) for q in mean_quals).items())


def length_distribution(sequences):
  """(read length, number of reads) pairs, sorted by length"""
  return sorted(cytoolz.frequencies(map(len, sequences)).items())


def shard_stats(quality_lines):
  """Decode one shard of quality lines

  :param quality_lines: sequence of raw quality strings
  :return: DecodedQualities for this shard
  """
  decoded = [phred.decode_counted(ln) for ln in quality_lines]
  quals = [q for q, _ in decoded]
  return DecodedQualities(
    qualities=quals,
    mean_qualities=mean_qualities(quals),
    out_of_range=sum(n for _, n in decoded))


def shard_stats_w(quality_lines):
  """A thin wrapper to allow proper tracebacks when things go wrong in a worker"""
  import traceback
  try:
    return shard_stats(quality_lines)
  except Exception as e:
    traceback.print_exc()
    print('')
    raise e


def reduce_shards(shards):
  """Stitch shard results back together, keeping shard order"""
  shards = list(shards)
  return DecodedQualities(
    qualities=[q for s in shards for q in s.qualities],
    mean_qualities=np.concatenate([s.mean_qualities for s in shards]) if shards else np.zeros(0, dtype=np.int64),
    out_of_range=sum(s.out_of_range for s in shards))


def decode_and_reduce(quality_lines, threads=1, shard_size=__shard_size__):
  """Decode quality lines and compute per read mean qualities.

  :param quality_lines: list of raw quality strings
  :param threads: number of worker processes. 1 means work in this process
  :param shard_size: quality lines per work unit
  :return: DecodedQualities
  """
  t0 = time.time()
  shards = list(cytoolz.partition_all(shard_size, quality_lines))
  if threads > 1 and len(shards) > 1:
    logger.debug('Decoding {} shards with {} processes'.format(len(shards), threads))
    with Pool(threads) as p:
      result = reduce_shards(p.imap(shard_stats_w, shards))
  else:
    result = reduce_shards(shard_stats(s) for s in shards)
  t1 = time.time()
  logger.debug('Decoded {} quality strings in {:0.3f}s'.format(len(quality_lines), t1 - t0))
  return result

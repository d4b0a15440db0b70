import numpy as np
import pytest

import quickfqc.stats as st
from quickfqc.lib import phred


seqs = ['ACGTACGTAC', 'ACGTA', 'GGGGGGGGGGGG', 'TTTTTTT', 'ACGTA']
qual_lines = ['IIIIIIIIII', '55555', '!!!!!!IIIIII', '+++++++', '?????']


def test_positional_median():
  """Stats: median is the middle element as read, not after sorting"""
  assert st.positional_median([9, 1, 5]) == 1
  assert st.positional_median([1, 2, 3, 100]) == 3
  assert st.positional_median([7]) == 7


def test_length_quartiles():
  """Stats: length min, median, truncated mean, max"""
  q = st.length_quartiles(seqs)
  assert q == st.Quartiles(min=5, median=12, mean=7, max=12), q
  # A sorted median would have been 7
  assert q.median != sorted(len(s) for s in seqs)[2]


def test_quality_quartiles():
  """Stats: quality quartiles are over per read truncated means"""
  mq = st.mean_qualities(phred.decode_many(qual_lines))
  assert mq.tolist() == [40, 20, 20, 10, 30]
  q = st.quality_quartiles(mq)
  assert q == st.Quartiles(min=10, median=20, mean=24, max=40), q


def test_mean_quality_truncates():
  """Stats: per read mean quality uses integer division"""
  mq = st.mean_qualities(phred.decode_many(['!5', '!!5']))
  assert mq.tolist() == [10, 6], mq


def test_empty_quality_record():
  assert st.mean_qualities([np.zeros(0, dtype=np.int64)]).tolist() == [0]


def test_empty_sample():
  """Stats: empty samples raise instead of dividing by zero"""
  with pytest.raises(st.EmptySampleError):
    st.length_quartiles([])
  with pytest.raises(st.EmptySampleError):
    st.quality_quartiles([])
  with pytest.raises(st.EmptySampleError):
    st.duplication_level([])


def test_duplication_level():
  """Duplication: percentage unique after truncating to 50 bases"""
  assert st.duplication_level(seqs) == 80.0
  assert st.duplication_level(['A', 'C', 'G', 'T']) == 100.0
  assert st.duplication_level(['ACGT'] * 4) == 25.0

  # Reads that only differ after base 50 are duplicates
  long_a, long_b = 'A' * 50 + 'C', 'A' * 50 + 'G'
  assert st.duplication_level([long_a, long_b]) == 50.0
  assert st.truncate_reads([long_a, 'ACG']) == ['A' * 50, 'ACG']


def test_duplication_level_range():
  """Duplication: level is in (0, 100]"""
  for sample in [['A'], ['A'] * 1000, ['A', 'C'] * 7, ['A' * n for n in range(1, 60)]]:
    d = st.duplication_level(sample)
    assert 0.0 < d <= 100.0, d


def test_duplication_histogram():
  """Duplication: only repeated reads are counted and heavy repeats share the top bin"""
  assert st.duplication_histogram(seqs) == [(2, 1)]
  assert st.duplication_histogram(['A', 'C', 'G']) == []

  sample = ['A'] * 3 + ['C'] * 3 + ['G'] * 12 + ['T'] * 25 + ['N']
  assert st.duplication_histogram(sample) == [(3, 2), (10, 2)]


def test_read_mode():
  """Stats: long read mode starts at 1000 bp"""
  assert not st.is_long_read(999)
  assert st.is_long_read(1000)
  assert st.position_step(st.is_long_read(1000)) == 10
  assert st.position_step(st.is_long_read(150)) == 1


def test_position_sums():
  """Stats: per position read counts and score sums"""
  counts, sums = st.position_sums(phred.decode_many(['II', '5', '555']))
  assert counts.tolist() == [3, 2, 1]
  assert sums.tolist() == [80, 60, 20]

  counts, sums = st.position_sums([])
  assert len(counts) == 0 and len(sums) == 0


def test_quality_by_position():
  """Stats: mean score at each position"""
  quals = phred.decode_many(qual_lines)
  points = st.quality_by_position(quals, 12, 1)
  assert len(points) == 12
  assert points[0] == (1, 20.0)
  # Only the 12 bp read reaches the last two positions
  assert points[-1] == (12, 40.0)
  assert points[10] == (11, 40.0)


def test_quality_by_position_step():
  """Stats: long read mode samples every 10th base"""
  quals = phred.decode_many(['I' * 1000, '5' * 1000])
  points = st.quality_by_position(quals, 1000, 10)
  assert len(points) == 100
  assert points[0] == (1, 30.0)
  assert points[1][0] == 11
  assert points[-1][0] == 991


def test_quality_by_position_unreached():
  """Stats: positions no read reaches are skipped, not divided by zero"""
  quals = phred.decode_many(['III'])
  assert st.quality_by_position(quals, 5, 1) == [(1, 40.0), (2, 40.0), (3, 40.0)]


def test_distributions():
  """Stats: value -> count pairs for mean quality and length"""
  mq = st.mean_qualities(phred.decode_many(qual_lines))
  assert st.mean_quality_distribution(mq) == [(10, 1), (20, 2), (30, 1), (40, 1)]
  assert st.length_distribution(seqs) == [(5, 2), (7, 1), (10, 1), (12, 1)]


def test_shards_keep_order():
  """Shards: results do not depend on the shard size"""
  lines = [chr(33 + n % 40) * (1 + n % 7) for n in range(103)]
  whole = st.decode_and_reduce(lines, shard_size=1000)
  for shard_size in [1, 7, 50]:
    parts = st.decode_and_reduce(lines, shard_size=shard_size)
    assert parts.mean_qualities.tolist() == whole.mean_qualities.tolist()
    assert [q.tolist() for q in parts.qualities] == [q.tolist() for q in whole.qualities]
  assert whole.mean_qualities.tolist() == [n % 40 for n in range(103)]


def test_decode_with_pool():
  """Shards: a process pool gives the same answer as working in process"""
  lines = ['I' * (n % 13 + 1) for n in range(50)] + ['!5'] * 50
  single = st.decode_and_reduce(lines, threads=1, shard_size=10)
  multi = st.decode_and_reduce(lines, threads=2, shard_size=10)
  assert multi.mean_qualities.tolist() == single.mean_qualities.tolist()
  assert len(multi.qualities) == 100


def test_decode_empty():
  dq = st.decode_and_reduce([])
  assert dq.qualities == [] and len(dq.mean_qualities) == 0 and dq.out_of_range == 0


def test_out_of_range_counted():
  dq = st.decode_and_reduce(['  II', 'II'])
  assert dq.out_of_range == 2
  assert dq.mean_qualities.tolist() == [20, 40]

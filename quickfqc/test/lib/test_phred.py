import numpy as np

from quickfqc.lib import phred


def test_decode():
  """Phred: '!' is 0, '5' is 20, 'I' is 40"""
  assert phred.decode('!').tolist() == [0]
  assert phred.decode('5').tolist() == [20]
  assert phred.decode('!5I').tolist() == [0, 20, 40]


def test_decode_length():
  """Phred: one score per character"""
  for line in ['', 'I', 'IIII', '!' * 150]:
    assert len(phred.decode(line)) == len(line)
  assert phred.decode('').dtype == np.int64


def test_out_of_range():
  """Phred: characters below '!' are clamped to 0 and counted"""
  assert phred.decode(' \t5').tolist() == [0, 0, 20]
  assert phred.count_out_of_range(' \t5') == 2
  assert phred.count_out_of_range('II!!') == 0


def test_decode_many():
  assert [q.tolist() for q in phred.decode_many(['!!', '55'])] == [[0, 0], [20, 20]]


def test_decode_counted():
  """Phred: scores and the clamped count come from one pass"""
  q, n = phred.decode_counted(' \t!5~')
  assert q.tolist() == [0, 0, 0, 20, 93]
  assert n == 2
  assert phred.raw_scores(' !').tolist() == [-1, 0]


def test_decode_long_read():
  """Phred: long quality strings decode to the same scores as per character"""
  line = ''.join(chr(33 + n % 42) for n in range(10000))
  q = phred.decode(line)
  assert len(q) == 10000
  assert q.tolist() == [ord(c) - 33 for c in line]

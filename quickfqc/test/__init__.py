import os
import gzip

example_data_dir = os.path.join(os.path.dirname(__file__), 'data')


def data_file(fname):
  return os.path.join(example_data_dir, fname)


def write_fastq(fname, seqs, quals=None, gzipped=False):
  """Write a FASTQ with the given sequences. Qualities default to all 'I' (Q40)"""
  quals = quals or ['I' * len(s) for s in seqs]
  text = ''.join('@read{}\n{}\n+\n{}\n'.format(n, s, q) for n, (s, q) in enumerate(zip(seqs, quals)))
  with (gzip.open(fname, 'wt') if gzipped else open(fname, 'w')) as fp:
    fp.write(text)
  return fname

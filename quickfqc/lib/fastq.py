"""Read the leading records of a FASTQ file, plain or gzipped, and pull out the sequence and quality lines."""
import gzip
import time
import zlib
import logging


logger = logging.getLogger(__name__)

__gzip_magic__ = b'\x1f\x8b'
__probe_lines__ = 10


def is_gzipped(fname):
  """Look at the magic bytes, not the extension

  :param fname: name of file
  :return: True if the first two bytes are 0x1f 0x8b
  """
  with open(fname, 'rb') as fp:
    magic = fp.read(2)
  if len(magic) < 2:
    raise EOFError('{} is shorter than 2 bytes'.format(fname))
  return magic == __gzip_magic__


def open_fastq(fname, gzipped):
  """Open file for reading text. Decode as UTF-8 and fail loudly on bad bytes.

  Lines end at a newline only. A carriage return before the newline is stripped by take_lines, a lone
  carriage return is not a line break.
  """
  if gzipped:
    return gzip.open(fname, 'rt', encoding='utf-8', errors='strict', newline='\n')
  return open(fname, 'r', encoding='utf-8', errors='strict', newline='\n')


def take_lines(fp, max_lines):
  """Yield up to max_lines lines from fp, newline stripped

  :param fp: pointer to file/stream
  :param max_lines: stop after these many lines
  """
  if max_lines <= 0:
    return
  for n, ln in enumerate(fp, 1):
    yield ln.rstrip('\r\n')
    if n >= max_lines:
      break


def read_lines(fname, gzipped, n_records):
  """Read enough lines to cover the first n_records FASTQ records

  :param fname: name of fastq file
  :param gzipped: True if the file needs to be decompressed
  :param n_records: how many 4 line records we want
  :return: list of at most 4 * n_records lines, in file order
  """
  t0 = time.time()
  with open_fastq(fname, gzipped) as fp:
    lines = list(take_lines(fp, n_records * 4))
  t1 = time.time()
  logger.debug('Took {:0.5}s to read {} lines from {}'.format(t1 - t0, len(lines), fname))
  return lines


def is_readable(fname, gzipped, n_lines=__probe_lines__):
  """Try decoding the first few lines of the file.

  :param fname:
  :param gzipped:
  :param n_lines: how many lines to try
  :return: True if we could decode them as text
  """
  try:
    with open_fastq(fname, gzipped) as fp:
      for _ in take_lines(fp, n_lines):
        pass
  except (UnicodeDecodeError, OSError, EOFError, zlib.error) as e:
    logger.debug('{} is not readable as text: {}'.format(fname, e))
    return False
  return True


def first_char(lines, idx):
  """First character of line idx, or '' if the line is missing or empty"""
  return lines[idx][:1] if idx < len(lines) else ''


def is_fastq(lines):
  """A quick structural check: '@' opens the first line, '+' the third.

  :param lines: leading lines of the file
  :return: bool
  """
  return first_char(lines, 0) == '@' and first_char(lines, 2) == '+'


def record_lines(lines, n_records, offset):
  """Every fourth line starting at offset, for n_records records. Missing lines are skipped."""
  return [lines[i] for i in range(offset, n_records * 4, 4) if i < len(lines)]


def sequence_lines(lines, n_records):
  return record_lines(lines, n_records, 1)


def quality_lines(lines, n_records):
  return record_lines(lines, n_records, 3)


def extract_fields(lines, n_records):
  """Split raw lines into parallel lists of sequence strings and quality strings.

  A truncated final record may have a sequence but no quality line. We drop such
  a trailing sequence so that the two lists stay index aligned.

  :param lines: output of read_lines
  :param n_records: number of records asked for
  :return: sequences, qualities
  """
  seqs, quals = sequence_lines(lines, n_records), quality_lines(lines, n_records)
  if len(seqs) > len(quals):
    logger.debug('Dropping {} trailing record(s) with no quality line'.format(len(seqs) - len(quals)))
    seqs = seqs[:len(quals)]
  return seqs, quals

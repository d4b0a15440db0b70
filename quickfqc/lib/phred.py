"""Phred+33 quality strings to integer scores"""
import numpy as np


__phred_offset__ = 33


def raw_scores(line):
  """Code point - 33 for every character, unclamped. Negative for characters below '!'"""
  return np.frombuffer(line.encode('utf-32-le'), dtype='<u4').astype(np.int64) - __phred_offset__


def decode_counted(line):
  """Scores for a quality string, plus how many characters fell below '!' and were clamped to 0

  :param line: quality line from a FASTQ record
  :return: np.array of int64, int
  """
  raw = raw_scores(line)
  return np.maximum(raw, 0), int((raw < 0).sum())


def decode(line):
  """Quality string -> int64 array of scores, one per character.

  Characters below '!' would give negative scores. We clamp those to 0.
  """
  return decode_counted(line)[0]


def decode_many(lines):
  return [decode(ln) for ln in lines]


def count_out_of_range(line):
  """Number of characters that fall below the Phred+33 range"""
  return decode_counted(line)[1]

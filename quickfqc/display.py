"""Terminal output for the single file mode: banner, summary lines and character charts"""
import click
import numpy as np

from quickfqc.stats import (quality_by_position, position_step, mean_quality_distribution, length_distribution,
                            duplication_histogram)


__q_threshold__ = 20
__axis_label_width__ = 10


def banner(sample):
  return [
    '~~~~~~~~~~~~~~~~~~~~~~~~~~~',
    '~~~~     quickfqc      ~~~~',
    '~~~~~~~~~~~~~~~~~~~~~~~~~~~',
    'Sampling the first {:,} records'.format(sample.sample_size),
    'of file',
    sample.fname
  ]


def sep():
  return '-----------------------------------------------------'


def section(title):
  return [sep(), title, sep()]


def text_chart(points, width=140, height=60, x_range=None, hline=None):
  """Draw (x, y) points as columns of '#'. Points that land in the same column show the tallest.

  :param points: list of (x, y), y >= 0
  :param width: columns in the plot area
  :param height: rows in the plot area
  :param x_range: (x0, x1) for the axis. Defaults to the range of the points
  :param hline: draw a horizontal reference line of '-' at this y
  :return: list of strings
  """
  if not points:
    return []
  xs = np.array([p[0] for p in points], dtype=float)
  ys = np.array([p[1] for p in points], dtype=float)
  x0, x1 = x_range or (xs.min(), xs.max())
  span = (x1 - x0) or 1.0

  col = np.clip(((xs - x0) / span * (width - 1)).round().astype(int), 0, width - 1)
  col_y = np.zeros(width)
  np.maximum.at(col_y, col, ys)
  y_max = max(col_y.max(), hline or 0) or 1.0
  bar = (col_y / y_max * height).round().astype(int)
  h_row = int(round(hline / y_max * height)) if hline is not None else None

  lines = []
  for row in range(height, 0, -1):
    label = '{:.1f}'.format(y_max * row / height) if row in (height, h_row) else ''
    lines.append('{} |{}'.format(
      label.rjust(__axis_label_width__),
      ''.join('#' if bar[c] >= row else ('-' if row == h_row else ' ') for c in range(width)).rstrip()))
  lines.append(' ' * __axis_label_width__ + ' +' + '-' * width)
  x_lo, x_hi = '{:g}'.format(x0), '{:g}'.format(x1)
  lines.append(' ' * (__axis_label_width__ + 2) + x_lo + x_hi.rjust(width - len(x_lo)))
  return lines


def duplication_lines(sample):
  lines = section('DUPLICATION') + ['Duplication level: {}%'.format(100. - sample.duplication_level)]
  points = duplication_histogram(sample.sequences)
  if not points:
    return lines + ['No duplication detected!']
  return lines + ['y = Number of reads duplicated x times'] + text_chart(
    points, sample.plot_width, sample.plot_height, x_range=(2, points[-1][0]))


def quality_lines(sample):
  q = sample.quality
  lines = section('QUALITY') + [
    'Mean Read Quality Distribution',
    'Min Q\tMed Q\tAvg Q\tMax Q',
    '{}\t{}\t{}\t{}'.format(q.min, q.median, q.mean, q.max),
    '',
    'y = Mean quality score at each position (horizontal line = Q{})'.format(__q_threshold__)
  ]
  lines += text_chart(
    quality_by_position(sample.qualities, sample.length.max, position_step(sample.long_reads)),
    sample.plot_width, sample.plot_height, x_range=(0, sample.length.max), hline=__q_threshold__)
  lines += ['', 'y = Distribution of mean read quality']
  lines += text_chart(
    mean_quality_distribution(sample.mean_qualities),
    sample.plot_width, sample.plot_height, x_range=(q.min, q.max))
  return lines


def length_lines(sample):
  ln = sample.length
  lines = section('LENGTH') + [
    'Read Length Distribution',
    'Min L\tMed L\tAvg L\tMax L',
    '{}\t{}\t{}\t{}'.format(ln.min, ln.median, ln.mean, ln.max),
    '',
    'y = Distribution of read length at each position'
  ]
  return lines + text_chart(
    length_distribution(sample.sequences), sample.plot_width, sample.plot_height, x_range=(ln.min, ln.max))


def sample_lines(sample):
  """Everything we print for a single computed sample"""
  return (
    banner(sample) +
    [sep(), 'Long Reads Mode' if sample.long_reads else 'Short Read Mode'] +
    duplication_lines(sample) +
    quality_lines(sample) +
    length_lines(sample))


def show_sample(sample):
  for ln in sample_lines(sample):
    click.echo(ln)

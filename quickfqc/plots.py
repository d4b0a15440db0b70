"""Save the single file charts as a matplotlib figure"""
import logging

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from quickfqc.stats import (quality_by_position, position_step, mean_quality_distribution, length_distribution,
                            duplication_histogram)


logger = logging.getLogger(__name__)

__q_threshold__ = 20


def plot_quality_by_position(ax, points, max_length, q_threshold=__q_threshold__):
  ax.bar([p[0] for p in points], [p[1] for p in points], color='g', width=1.0)
  ax.axhline(y=q_threshold, color='r', linestyle=':')
  plt.setp(ax, xlim=(0, max_length + 1), xlabel='Position (bp)', ylabel='Mean BQ')


def plot_distribution(ax, points, xlabel, ylabel='Reads', fmt='k.-'):
  ax.plot([p[0] for p in points], [p[1] for p in points], fmt)
  plt.setp(ax, xlabel=xlabel, ylabel=ylabel)


def plot_duplication(ax, points):
  if not points:
    ax.text(0.5, 0.5, 'No duplication detected', ha='center', va='center', transform=ax.transAxes)
  else:
    ax.bar([p[0] for p in points], [p[1] for p in points], color='c', align='center')
  plt.setp(ax, xlim=(1.5, 10.5), xlabel='Times seen', ylabel='Sequences')


def plot_sample(sample, fig_fname):
  """Four panels: quality by position, mean read quality, read length, duplication

  :param sample: a computed Sample
  :param fig_fname: where to save the figure
  """
  fig = plt.figure(figsize=(10, 8))
  plt.subplots_adjust(hspace=0.4, wspace=0.3)

  ax1 = plt.subplot(221)
  plot_quality_by_position(
    ax1,
    quality_by_position(sample.qualities, sample.length.max, position_step(sample.long_reads)),
    sample.length.max)
  plt.title('Mean quality by position')

  ax2 = plt.subplot(222)
  plot_distribution(ax2, mean_quality_distribution(sample.mean_qualities), 'Mean read quality')
  plt.title('Mean read quality')

  ax3 = plt.subplot(223)
  plot_distribution(ax3, length_distribution(sample.sequences), 'Read length (bp)')
  plt.title('Read length')

  ax4 = plt.subplot(224)
  plot_duplication(ax4, duplication_histogram(sample.sequences))
  plt.title('Duplication')

  fig.suptitle(sample.fname)
  plt.savefig(fig_fname)
  plt.close(fig)
  logger.debug('Saved figure to {}'.format(fig_fname))

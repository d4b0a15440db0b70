"""Tab separated summary of several samples"""
import logging

import pandas as pd


logger = logging.getLogger(__name__)

__report_fname__ = 'rsFQC.summary.txt'
__report_columns__ = [
  'File',
  'Minimum Length', 'Median Length', 'Average Length', 'Maximum Length',
  'Minimum Quality', 'Median Quality', 'Average Quality', 'Maximum Quality',
  'Duplication Level'
]


def summary_row(sample):
  return [
    sample.fname,
    sample.length.min, sample.length.median, sample.length.mean, sample.length.max,
    sample.quality.min, sample.quality.median, sample.quality.mean, sample.quality.max,
    sample.duplication_level
  ]


def summary_frame(samples):
  """One row per computed sample, in the order given"""
  unprocessed = [s.fname for s in samples if not s.processed]
  if unprocessed:
    raise RuntimeError('Can not report on samples that have not been computed: {}'.format(', '.join(unprocessed)))
  return pd.DataFrame([summary_row(s) for s in samples], columns=__report_columns__)


def write_summary(samples, fname=__report_fname__):
  """Write the summary table

  :param samples: list of computed Samples
  :param fname: output file name
  :return: the DataFrame that was written
  """
  df = summary_frame(samples)
  df.to_csv(fname, sep='\t', index=False)
  logger.debug('Wrote summary of {} files to {}'.format(len(df), fname))
  return df

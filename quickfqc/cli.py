import logging

import click

from quickfqc.sample import __default_sample_size__, __plot_width__, __plot_height__
from quickfqc.report import __report_fname__


logger = logging.getLogger(__name__)


@click.group()
@click.version_option()
@click.option('-v', '--verbose', type=int, default=0)
def cli(verbose):
  """Quick quality summaries from the first reads of FASTQ files"""
  logging.basicConfig(level=[
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG
  ][min(verbose, 3)])

  from quickfqc.version import __version__
  logger.debug('quickfqc version {}'.format(__version__))


@cli.command('sample', short_help='Summarize the first reads of one or more FASTQ files')
@click.argument('fastq', nargs=-1, required=True)
@click.option('--sample-size', type=click.IntRange(min=1), default=__default_sample_size__, show_default=True,
              help='Number of records to sample from the start of each file')
@click.option('-t', '--threads', type=click.IntRange(min=1), default=2, show_default=True,
              help='Processes to use for per read work')
@click.option('--report', type=click.Path(dir_okay=False), default=__report_fname__, show_default=True,
              help='Summary file written when more than one FASTQ is given')
@click.option('--fig-file', type=click.Path(dir_okay=False), help='Single file mode: also save the charts here')
@click.option('--width', type=click.IntRange(min=10), default=__plot_width__, show_default=True, help='Chart width')
@click.option('--height', type=click.IntRange(min=5), default=__plot_height__, show_default=True, help='Chart height')
def sample(fastq, sample_size, threads, report, fig_file, width, height):
  """Sample the first records of each FASTQ (plain or gzipped) and compute read length, read quality
  and duplication statistics.

  \b
  With one valid FASTQ the statistics and charts are printed to the terminal.
  With more than one, a tab separated summary is written to the report file.
  Inputs that are not readable FASTQ files are skipped.
  """
  import quickfqc.sample as qs

  try:
    checked = qs.check_files(fastq, sample_size=sample_size, plot_width=width, plot_height=height)
    samples = qs.process_checked(checked, threads=threads)
  except (qs.NoValidInputError, qs.EmptySampleError) + qs.io_errors as e:
    logger.error(str(e))
    raise click.ClickException(str(e))

  if len(checked) == 1:
    import quickfqc.display as disp
    disp.show_sample(samples[0])
    if fig_file is not None:
      import quickfqc.plots as qplt
      qplt.plot_sample(samples[0], fig_file)
  else:
    import quickfqc.report as rep
    rep.write_summary(samples, report)
    click.echo('Summary of {} files written to {}'.format(len(samples), report))


@cli.command('report-header')
def report_header():
  """Display the columns of the summary report"""
  from quickfqc.report import __report_columns__
  click.echo('\t'.join(__report_columns__))

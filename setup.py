#!/usr/bin/env python

from setuptools import setup

setup(name='BAMIndex',
      version='0.1',
      description='Build a .bai index for a coordinate-sorted BAM file or URL',
      packages=['bamindex'],
      install_requires=[
          'configobj',
          'pysam'
      ],
      extras_require={
          'test': ['pytest']
      },
      entry_points={
          'console_scripts': [
              'build_bam_index=bamindex.build_bam_index:main'
          ]
      }
      )

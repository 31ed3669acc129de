import os.path as op
from setuptools import setup

with open('README.rst', 'r') as fid:
    long_description = fid.read()

# get the version (don't import pyiaaft here, so dependencies are not needed)
version = None
with open(op.join('pyiaaft', '_version.py'), 'r') as fid:
    for line in (line.strip() for line in fid):
        if line.startswith('__version__'):
            version = line.split('=')[1].strip().strip('\'')
            break
if version is None:
    raise RuntimeError('Could not determine version')

extras = {
    'test': ['pytest', 'pytest-xdist', 'pytest-cov'],
}

setup(name='pyiaaft',
      version=version,
      description='Iteratively adjusted amplitude-adjusted Fourier transform '
                  'surrogates of 1d signals.',
      license='MIT',
      packages=['pyiaaft'],
      install_requires=[
          'numpy>=1.25', 'scipy', 'joblib', 'tqdm',
      ],
      extras_require=extras,
      zip_safe=False,
      python_requires='>=3.10',
      long_description=long_description,
      long_description_content_type='text/x-rst',
      classifiers=['Intended Audience :: Science/Research',
                   'Intended Audience :: Developers',
                   'License :: OSI Approved',
                   'Programming Language :: Python',
                   'Topic :: Software Development',
                   'Topic :: Scientific/Engineering',
                   'Operating System :: Microsoft :: Windows',
                   'Operating System :: POSIX',
                   'Operating System :: Unix',
                   'Operating System :: MacOS',
                   'Programming Language :: Python :: 3'],
      platforms='any',
)

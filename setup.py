from setuptools import setup


# Get the long description from the README file
#def readme():
#    with open('README.rst') as f:
#        return f.read()

setup(name='lineintlib',
      version='0.1.0',
      description='Numerical line integrals over segments, paths, curves, rays, lines and planes',
      license='MIT',
      packages=['lineintlib',
                'lineintlib.geometry',
                'lineintlib.quadrature'],
      python_requires='>=3.10',
      install_requires=[
          'scipy>=1.15',
          'numpy',
          'pint',
           ],
      extras_require={
          'test': ['pytest'],
      },
      #long_description=readme(),
      long_description='None',
      long_description_content_type='text/markdown',
      keywords='quadrature line-integral',
      classifiers=[
          # How mature is this project? Common values are
          #   3 - Alpha
          #   4 - Beta
          #   5 - Production/Stable
          'Development Status :: 3 - Alpha',

          'Intended Audience :: Science/Research',
          'Intended Audience :: Developers',
          'Topic :: Scientific/Engineering',
          'Topic :: Scientific/Engineering :: Mathematics',

          'License :: OSI Approved :: MIT License',

          'Programming Language :: Python :: 3.10',
      ],
      zip_safe=False)

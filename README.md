# osrank

Tools for ranking open-source projects and the accounts that contribute to
them. The package builds a weighted network out of project dependencies,
contributions and maintainers, normalises it into a probability matrix and
ranks every node with an iterative PageRank. Two commands gather the input
data from a package-registry dump and from the GitHub API.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## Gathering the data

### Dependencies

```
osrank-source-dependencies <PATH-TO-DEPENDENCIES-CSV> <PLATFORM> [--output-dir DIR]
```

Reads the dependencies dump, keeps the rows whose platform column equals the
given platform (for example `Cargo`) and writes two files into `DIR`
(default `data`):

- `<platform>_dependencies.csv` with the header `FROM_ID,TO_ID`, one line per
  unique project-to-project dependency (rows without a dependency project id
  are skipped);
- `<platform>_dependencies_meta.csv` with the header `ID,NAME,PLATFORM`, one
  line per unique project.

The platform name is lower-cased in the file names. The output files must not
exist yet; existing files are never overwritten. A matching row that cannot be
parsed raises `ValueError`.

### Contributions

```
export OSRANK_GITHUB_TOKEN=token
osrank-source-contributions <PATH-TO-PROJECTS-CSV> <PLATFORM> [--resume-from REPO_URL]
```

For each non-fork project of the platform whose repository is on GitHub, the
command queries `/repos/<owner>/<repo>/stats/contributors` and writes the
maintainers to `data/<platform>_contributions.csv` (header
`ID,MAINTAINER,REPO,CONTRIBUTIONS,NAME`; maintainers are written as
`github@<login>`). The `data` directory must exist. An account counts as a
maintainer when it owns the repository, has more than 50 contributions, or is
the only contributor. Each project name is processed once. Requests are spaced
out by 0.8 seconds, and an answer of 202 (statistics still being computed) is
retried after a second, up to five attempts. Projects whose URL is not a
GitHub repository, or whose request fails, are reported and skipped.

Without `--resume-from` the output file must not exist yet. With it, the
existing file is appended to and processing starts with the record after the
one whose repository URL equals `REPO_URL`. If `OSRANK_GITHUB_TOKEN` is not
set, the command prints a message and exits with status 1.

## Using the library

```python
import numpy as np

from osrank.adjacency import new_network_matrix
from osrank.hyperparams import HyperParams
from osrank.pagerank import pagerank_naive_iterative, pagerank_normalise

deps = np.array([[0, 1, 0], [0, 0, 0], [1, 1, 0]], dtype=float)
contribs = np.array([[100, 0, 0], [0, 30, 0], [0, 60, 20]], dtype=float)
maintainers = np.array([[1, 0, 0], [0, 1, 0], [0, 1, 0]], dtype=float)

network = new_network_matrix(deps, contribs, maintainers, HyperParams())
factor = 1.0 / network.shape[0]
ranks = pagerank_naive_iterative(pagerank_normalise(network.T, factor), 0.85, factor)
```

### `osrank.adjacency`

- `new_network_matrix(dep_matrix, contrib_matrix, maintainer_matrix, hyperparams)`
  builds the row-normalised network: projects first, accounts after them, on
  both axes. If any input holds Python objects such as `fractions.Fraction`,
  the whole computation is exact; otherwise it uses floats.
- `normalise_rows(matrix)` divides each row by its sum, leaving all-zero rows
  as they are.
- `hadamard_mul(left, right)` is the element-wise product; shapes must match.

### `osrank.pagerank`

- `pagerank_naive_iterative(dense, damping_factor, outbound_links_factor)`
  iterates `rank = d * M rank + (1 - d) / n`, starting from
  `outbound_links_factor` for every node, for at most 100 iterations or until
  the ranks stop changing. It returns an `n x 1` array.
- `pagerank_normalise(matrix, outbound_links_factor)` fills every all-zero
  column with `outbound_links_factor`, returning a new matrix.
- `assert_rows_normalised(matrix, epsilon)` and
  `assert_cols_normalised(dense, epsilon)` return the row or column sums and
  raise `NotNormalisedError` (a `ValueError`) when one is not within `epsilon`
  of one. All-zero rows are accepted; columns are not.

### `osrank.hyperparams`

`HyperParams` holds the edge factors of the model: `contrib_factor` (1/7),
`contrib_prime_factor` (2/5), `depend_factor` (4/7), `maintain_factor` (2/7)
and `maintain_prime_factor` (3/5). `parse_hyperparams` builds one from
fractions written as text such as `"4/7"`, keeping the default for any value
that is missing or unparsable; `to_weight` parses a single such value.
`parse_seed_set` reads a file of trusted node ids, one per line, returning
`None` for an empty file. `parse_algorithm` maps `naive` or `incremental` to
an `OsrankAlgorithm` member, or returns `None`.

### `osrank.source_dependencies` and `osrank.source_contributions`

The commands above are `source_dependencies.main` and
`source_contributions.main`; their work is also available as
`source_dependencies(path, platform, output_dir)` and
`source_contributors(github_token, path, platform, resume_from)`, along with
`Dependency`, `Project`, `GithubContribution`, `deserialise_project`,
`extract_github_owner_and_repo`, `is_maintainer`, `call_github` and
`GithubError`.

## What the package does not do

The package has no random-walk osrank algorithm and no command that computes
ranks: `parse_algorithm`, `parse_seed_set` and `HyperParams` parse the
settings such a run would take, but nothing in the package runs one. It also
does not read the generated CSV files back into matrices, and it does not
write ranks to a file; the ranking is available only through the library
functions above.
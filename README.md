# algokit

A collection of small algorithms and process-coordination tools, each usable
as a library module and most of them as a command.

## Installation

```
pip install .
pip install ".[test]"   # with the test dependencies
```

## What is inside

| Module | What it does |
| --- | --- |
| `algokit.rbtree` | `RBTree`, a red-black tree mapping string keys to unsigned 64-bit integers, with binary `save`/`load`, and a command loop (`run`) |
| `algokit.number_systems` | `to_decimal`, `from_decimal`, `convert` between bases 2 to 36 |
| `algokit.sieve` | `sieve(limit)`, the sieve of Eratosthenes |
| `algokit.dag` | `Job`, `Pipeline` and helpers (`parse_config`, `load_config`, `validate_dag`, ...) to check and run a YAML job graph |
| `algokit.kmp` | `prefix_function`, `kmp_search`, `kmp_report` |
| `algokit.mathlib` | two prime counters and two sorts, picked through `get_implementation` |
| `algokit.divcalc` | `evaluate_line`, `evaluate_text`: lines of successive integer divisions |
| `algokit.shmcalc` | a division calculator run in a child process that hands its results back through shared memory |
| `algokit.bitonic` | bitonic sort, sequential and with worker threads (`parallel_bitonic_sort`) |
| `algokit.topology` | `Topology`, `NodeMessage` and `run_controller`, the controller of a tree of worker nodes linked by ZeroMQ |
| `algokit.node` | `Node` and `run_node`, a worker node of that tree |

## Library use

```python
from algokit.rbtree import RBTree
from algokit.number_systems import convert
from algokit.kmp import kmp_search, kmp_report
from algokit.divcalc import evaluate_line

tree = RBTree()
tree.insert("apple", 5)  # True; False if the key is already present
"apple" in tree          # True
tree.get("apple")        # 5; KeyError if absent
tree.delete("apple")     # KeyError if absent

convert("ff", 16, 2)     # "11111111"

kmp_search("abababa", "aba")   # [0, 2, 4]
kmp_report("abc", "z")         # "-1"

evaluate_line("100 5 2")       # 10
```

Keys in `RBTree` are ordered first by length and then character by
character (`compare_keys`); `items()` yields them in that order.

## Commands

### Dictionary

```
algokit-dict
```

Reads commands from standard input:

- `+ word value` — add a word; answers `OK` or `Exist`
- `- word` — remove a word; answers `OK` or `NoSuchWord`
- `word` — look a word up; answers `OK: value` or `NoSuchWord`
- `! Save path` / `! Load path` — write the dictionary to a binary file or
  read it back; answers `OK`

Words are lower-cased (ASCII letters) before use. Files that cannot be opened
or are truncated are reported as `ERROR: ...`. A value that is not a
non-negative integer below 2^64 ends the loop.

### Base conversion

```
echo "16 2 ff" | algokit-convert
```

Reads the source base, the target base and the number, and prints the number
in the target base.

### Sieve

```
algokit-sieve
```

Sieves up to 5,000,000 and prints `1` or `0` for whether 13 is prime.

### Job pipeline

```
algokit-dag pipeline.yaml
```

The YAML file maps job numbers (1 to N, no gaps) to job descriptions:

```yaml
1:
  isStart: true
  isEnd: false
  dependencies: [2, 3]
  command: "cc -o app main.o util.o"
2:
  isStart: false
  isEnd: true
  command: "cc -c main.c"
3:
  isStart: false
  isEnd: true
  command: "cc -c util.c"
```

The graph is checked for cycles, for a start job, for end jobs without
dependencies, and for being connected, and the verdict is printed. Then jobs
without dependencies are run as shell commands, at most five at a time, and
after each batch every job whose dependencies have all completed is run in
turn. A job without a command counts as failed, and jobs depending on it are
not run.

### Prime counting and sorting

```
algokit-mathlib 1 1
```

With two arguments the first picks the implementation (1: trial division and
bubble sort, 2: sieve and quicksort) and the second the function (1: count
primes in an interval, 2: sort an array); with one argument it is the
function and implementation 1 is used. The interval, or the array length
followed by its numbers, is read from standard input.

### Division calculator

```
algokit-divcalc < numbers.txt
algokit-shmcalc
```

Each input line holds integers separated by single spaces; the first is
divided by each of the rest in turn and the result printed. `algokit-divcalc`
stops with `Division by zero!` or `Invalid character!` on standard error.
`algokit-shmcalc` asks for a file name, evaluates the file in a child process
and prints each result passed back through shared memory, or
`Division by 0`, after which it stops.

### Bitonic sort

```
algokit-bitonic 1024 4
```

Sorts a random array of the given size (a power of two) with the given number
of threads (a power of two) and prints the time taken.

### Node network

```
algokit-controller [port]
```

Reads commands from standard input (the default port is 4040):

- `create id parent` — start a node under an existing parent (`-1` is the
  controller); answers `OK: pid`
- `exec id text pattern` — the node waits ten seconds and prints
  `Ok:id:positions` for `pattern` in `text`
- `pingall` — every live node prints `Ok:id`
- `kill id` — stop a node and the nodes below it; `kill -1` stops everything

Nodes are started by the controller as `algokit-node id parent [base_port]`;
each listens to its parent and publishes to its children on port
`base_port + id`.

## What is not included

There is no variant of the division calculator that runs in a child process
connected by a pipe; use `algokit-divcalc` directly, or `algokit-shmcalc` for
the child-process version.

## Tests

```
pytest
```
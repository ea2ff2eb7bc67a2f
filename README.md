# bigrepair

Grammar compression with the RePair algorithm, plus helper tools for
prefix-free parsing: one turns a phrase dictionary into a terminated
integer sequence, another merges a dictionary grammar and a parse grammar
into one grammar.

All files are binary arrays of 32-bit native-endian signed integers.
No third-party libraries are needed.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Command-line tools

Every command takes exactly one file name, echoes its command line on
standard error, and exits with status 1 on a usage error or a failure.

### Compress a sequence of integers

```
bigrepair-irepair data
```

Reads `data` as a sequence of non-negative integers and writes the grammar
to `data.R` (the alphabet size, one more than the largest input value,
followed by one pair of integers per rule) and the final sequence to
`data.C`. Rule `k` defines the symbol `alpha + k`. Statistics, including
an estimate of the compact output size and a compression ratio, are
printed on standard error.

### Decompress

```
bigrepair-idespair data
```

Expands `data.R` and `data.C` into `data.out`, one 32-bit integer per
symbol.

```
bigrepair-despair data
```

Does the same but writes one byte per symbol (the low eight bits) into
`data.out`.

Both report the number of rules, the length of the compressed sequence,
the maximum rule depth and an estimated compressed size. A sequence symbol
that refers to a missing rule is reported as an error.

### Prepare a dictionary

```
bigrepair-procdic data.dicz
```

Reads the dictionary `data.dicz` and the phrase lengths in
`data.dicz.len`, and writes `data.dicz.int`: every byte as an integer,
with a unique terminator (256, 257, ...) after each phrase. Missing or
trailing bytes in the dictionary are reported as errors. The number of
phrases is printed on standard error.

### Merge dictionary and parse grammars

```
bigrepair-postproc data
```

Renames `data.parse.R` and `data.parse.C` to `data.R` and `data.C`, then
combines them with the dictionary grammar (`data.dicz.int.R`,
`data.dicz.int.C`) into one grammar written back to `data.R` and
`data.C`. Each dictionary phrase is reduced to a single nonterminal by
balanced rules, and the parse's terminals (phrase numbers starting at 1)
are replaced by those nonterminals. The parse `.R` file must start with a
three-integer header `(alpha, recursive_len, rlen)`, which is kept as is.

An estimated output size is printed as the last line on standard output;
the estimate counts only the rules added from the dictionary.

## Library use

```python
from bigrepair.irepair import compress, estimated_size
from bigrepair.despair import decompress

grammar = compress([1, 2, 1, 2, 1, 2, 3], factor=0.5, minsize=256)
print(grammar.alpha, grammar.rules, grammar.sequence)
print(estimated_size(grammar))

text, stats = decompress(grammar.alpha, grammar.rules, grammar.sequence)
assert text == [1, 2, 1, 2, 1, 2, 3]
```

- `bigrepair.irepair.compress` builds a `Grammar` (`alpha`, `rules`,
  `sequence`, `original_length`) from a list of integers;
  `compress_file` works on a file as the command does.
- `bigrepair.despair.expand` returns the terminals one symbol derives;
  `decompress` returns the expanded text together with
  `DecompressionStats`. `read_grammar` reads `.R`/`.C` files into
  `(alpha, rules, sequence)`, and `decompress_file` writes `.out` and
  returns the statistics.
- `bigrepair.procdic.dictionary_to_ints` and `process_dictionary` produce
  the terminated integer form of a dictionary.
- `bigrepair.postproc.merge_grammars` and `postprocess` combine the
  dictionary and parse grammars into a `PostprocessResult`.
- `bigrepair.basics.read_ints` and `write_ints` read and write the integer
  files used throughout; `bits` gives the bit width of an integer.

The building blocks of the compressor are also importable:
`bigrepair.records.Records`, `bigrepair.heap.PairHeap`,
`bigrepair.pairhash.PairHash` and `bigrepair.pairarray.CircularArray`.

## What is not included

- The package does not compute the prefix-free parse itself: the
  dictionary `data.dicz`, its `data.dicz.len` and the parse must come from
  another tool.
- `bigrepair-irepair` writes a `.R` file with a one-integer header, while
  `bigrepair-postproc` expects the parse grammar's `.R` file to carry the
  three-integer header described above; producing that file is left to
  other tools.
- The merged grammar keeps that three-integer header, so it is not in the
  format `bigrepair-despair` and `bigrepair-idespair` read.
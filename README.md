# machlab

This package is a set of machine-level tools written in plain Python:

- a simulator for the **Simple Machine**, a small load/store CPU with eight 32-bit registers;
- a **boundary-tag heap allocator** that uses headers and trailers, a first-fit search, block splitting and coalescing, together with a harness that runs workloads against it;
- some **data-structure exercises**: integer and string elements, a doubly linked list, a binary search tree of elements, a list with map/filter/fold operations, and a few smaller routines.

It depends only on the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## The Simple Machine simulator

```
machlab-sm [-p startPC] [-m addr:count]* [-r] filename
```

A program file has one line for each chunk of memory. A line holds a hexadecimal address, a colon, and then bytes written as pairs of hex digits. You may put spaces between the pairs:

```
100: 0000 0000 1000
106: f000
```

If `-p` is not given, execution starts at the address on the first line. The machine runs until it reaches a `halt` instruction.

- `-p startPC`: start at this hexadecimal address.
- `-m addr:count`: when the run ends, dump `count` words of memory starting at `addr`. Both values are hexadecimal. The option can be repeated.
- `-r`: when the run ends, print every register in hex and in decimal.

When the arguments are wrong, the command prints a usage line and exits with status 1. It also exits with status 1 when the file cannot be read or a program touches memory or registers outside the machine. Memory is 40000 bytes. An unknown opcode or ALU function does not stop the run; the machine prints an "Illegal" message and carries on.

`sys 0` reads from a file descriptor and `sys 1` writes to one. `sys 2` prints the command it would run. It runs the command through the shell only when `SIMPLE_MACHINE_ALLOW_EXEC=1` is set in the environment.

You can also drive the machine from Python:

```python
from machlab.simulator import Machine

machine = Machine()
machine.load_file("program.txt")
steps = machine.run()
for line in machine.register_lines():
    print(line)
```

`Machine` also provides `load`, `fetch`, `execute`, `step`, `read_word`, `write_word` and `memory_lines`. Pass `halt_on_read=True` to stop the machine after a `sys 0` read. Out-of-range accesses raise `machlab.simulator.MachineError`. `parse_args` turns a command line into an `Options` value.

## The heap allocator

`machlab.heap.Heap(size)` manages a fixed region of `size` bytes. Addresses are offsets into that region.

- `malloc(size)` returns a payload address. It raises `MemoryError` when no free block is large enough.
- `free(payload)` releases a block and merges it with free neighbours. It raises `ValueError` when the address is not an allocated payload.
- `blocks()` yields a `Block` (start, size, in-use flag) for each block in the heap.
- `payload_view(payload, size)` returns a writable `memoryview` of an allocation.

```python
from machlab.heap import Heap

heap = Heap(1024 * 1024)
p = heap.malloc(16)
heap.free(p)
assert heap.malloc(16) == p   # the freed block is reused
```

The harness runs named workloads against the allocator:

```
machlab-heapcheck all
machlab-heapcheck coalesce2
```

The workloads are `sanity`, `freelist1`, `freelist2`, `simple`, `fixedsize`, `random`, `coalesce1` and `coalesce2`. The command exits non-zero if any of them fails. In Python, use `find_test(name)` and `run_test(test)`; `check_alloc` is the per-allocation check that raises `AllocationError`.

## Elements, lists and trees

`machlab.elements` defines `IntElement` and `StrElement`. Integer elements always order before string elements. `parse_string` makes an `IntElement` from text that is a whole decimal integer, and a `StrElement` from anything else. `compare_elements` and `sort_elements` use that ordering.

```
machlab-sort 5 apple 3 banana -1
```

This prints `Sorted: -1 3 5 apple banana `.

`machlab.linkedlist.LinkedList` is a doubly linked list. `append` returns a `Node`, which `remove` accepts. `machlab.elementtree.ElementTree` is a binary search tree of elements in which equal elements go to the left. `render` lists the tree in pre-order and indents each level by one space.

```
machlab-demo 4 pear 9 fig 2
```

The demo prints `42` and `Hello, World!`. It then puts the arguments on a list and every other one on a tree, and prints the tree, the integers on the list and the strings on the list. Last, it empties the list and prints the tree again. In Python, `machlab.demo.run(args, include)` returns those lines, and `include` can be any selector you choose.

## Functional list

`machlab.funclist.FuncList` is a growable list with these operations:

- `insert`, `remove`, `index`;
- `map1` and `map2`, which return new lists (`map2` stops at the shorter input);
- `foldl`, `filter` and `foreach`.

`demo()` returns the output lines of a short filter / map / fold walk-through.

`machlab-trunc` takes a mix of words and numbers. Words are paired in order with the non-negative numbers, and each word is cut to the length of its number. The command prints the cut words and then the largest number:

```
machlab-trunc apple 3 banana 2 cherry 4
```

## Smaller exercises

- `machlab-bintree 5 3 8 1` builds a binary search tree from the integer arguments. It prints the values in order, then the path from the root to the last value inserted. `machlab.bintree` also provides `Node`, `build` and `report`.
- `machlab-bubble 3 1 2` prints the integer arguments in ascending order, one per line. If an argument is not a number, it reports that and exits with status 1.

`machlab.exercises` also provides:

- `bubble_sort`;
- `count_ones`, which counts the set bits of a 32-bit word;
- `select_op`, which picks an operation on `y` and `z` by the value of `x`;
- `number_names`, which numbers up to ten names. `PRIME_MINISTERS` is its sample list.
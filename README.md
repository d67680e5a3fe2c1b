# tinykern

`tinykern` provides building blocks for working with block-addressed storage.
It also includes a few small kernel-style data structures:

* block devices backed by memory or by an image file, and a registry for them
* ATA helper routines: device-type detection, sector count, LBA48 address
  bytes, byte swapping and the Internet checksum
* a circular list and a fixed-size ring buffer
* a PS/2 scan code set 1 translator
* a cooperative round-robin thread scheduler

Everything is pure Python. There are no third-party dependencies.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Block devices (`tinykern.blockdev`)

A block device returns fixed-size blocks by number. `read_block(n)` always
returns exactly `blk_size` bytes. A trailing partial block is padded with
zeros. A block number outside `0 .. tot_length - 1` raises `IndexError`.

* `MemoryBlockDevice(data, name="mem", blk_size=512)` wraps bytes held in
  memory.
* `FileBlockDevice(path, name="file", blk_size=512)` opens an image file
  read-only. It can be used as a context manager and has `close()`.
* `BlockDevice` is the abstract base. `BlockDevType` tells a mass-storage
  device from a partition.
* `BlockRegistry` keeps devices in the order they were registered. It
  supports `len()` and iteration.

```python
from tinykern.blockdev import FileBlockDevice, ip_checksum

with FileBlockDevice("disk.img", name="disk") as dev:
    first_sector = dev.read_block(0)
    print(hex(ip_checksum(first_sector)))
```

The module also has these helpers:

* `detect_device_type(cl, ch)` maps the LBA-mid/LBA-high signature bytes to a
  `DeviceType`: `PATAPI`, `SATAPI`, `PATA`, `SATA` or `UNKNOWN`.
* `device_length(identify_words)` returns the sector count held in
  IDENTIFY words 100 to 103.
* `lba48_bytes(blk_num)` returns the six bytes of a 48-bit address, least
  significant first. It raises `ValueError` if the number does not fit.
* `swap_word_bytes(data)` swaps the bytes of every 16-bit word.
* `ip_checksum(data)` computes the one's-complement Internet checksum over
  big-endian 16-bit words. An odd final byte is padded with zero.

## Circular list (`tinykern.clist`)

`CircularList` is an ordered ring with indexed `insert`, `peek` and `pop`.
Both ends are available through `push_front`/`push_back`,
`peek_front`/`peek_back` and `pop_front`/`pop_back`.

An out-of-range index raises `IndexError`.

`find_where` returns the first value that matches a predicate, or `None`.
`find_idx_where` returns its position, or `-1`.

`concat(other)` moves every value of `other` onto the end of the list and
leaves `other` empty.

`rotate_fwd(n)` and `rotate_bkwd(n)` move the head.

## Ring buffer (`tinykern.ring`)

`RingBuffer(consume_next, size=8)` is a bounded FIFO.

* `produce(item)` returns `False` and drops the item when the buffer is full.
* `consume()` passes the oldest item to `consume_next`. It returns `False`
  when the buffer is empty.

## Keyboard (`tinykern.keyboard`)

`translate(scancodes)` turns a sequence of scan code set 1 bytes into text.
`KeyboardState.feed(code)` does the same one byte at a time and returns a
character or `None`.

* Shift and Caps Lock are tracked.
* Backspace is reported as `"\b"`.
* The byte after an extended-key prefix (`0xE0`) produces no character.

## Scheduler (`tinykern.scheduler`)

`Scheduler` runs threads cooperatively, round-robin, alongside a main thread
of pid 0.

`create_kthread(entry_point, arg)` queues a thread, which starts as
`entry_point(arg)`. If that call returns a generator, every `yield` gives up
the processor. A plain function runs to completion at once.

A thread blocks by calling `block_on(queue)` and then yielding.
`unblock_all(queue)` and `unblock_head(queue)` make waiting threads ready
again.

`run()` keeps switching threads until nothing else is ready.

```python
from tinykern.scheduler import Scheduler

sched = Scheduler()
log = []

def worker(name):
    for step in range(2):
        log.append((name, step))
        yield

sched.create_kthread(worker, "a")
sched.create_kthread(worker, "b")
sched.run()
```

## What it does not do

* tinykern reads raw blocks only. It does not parse partition tables.
* It does not read any filesystem from a disk image: no directories, no file
  contents, no path lookup.
* It installs no command-line tool. Everything is used as a library.
* It does not talk to real hardware. The ATA helpers only compute values from
  data you pass in.
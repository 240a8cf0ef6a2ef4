# lritkit

A library for working with the GOES LRIT and HRIT downlinks. It turns a
stream of soft-decision symbols into 892-byte packets and checks transport
packets. It also parses DCS message headers, joins EMWIN QBT packets into
files, and parses the command-line options of the LRIT file, EMWIN and
packet relay tools.

## Installation

```
pip install lritkit
```

To run the test suite:

```
pip install "lritkit[test]"
pytest
```

## Command-line tool

### `lritkit-sync-words`

Prints the 64-bit convolutionally encoded sync words that the correlator
looks for. There is one for LRIT (NRZ-L) and one for HRIT (NRZ-M) at
0 degree phase, and one of each at 180 degree phase:

```
lritkit-sync-words
```

## Library overview

| Module | What it holds |
| --- | --- |
| `lritkit.crc` | `crc(data)`: the CRC-16 (polynomial 0x1021, initial value 0xFFFF) used on transport PDUs |
| `lritkit.transport_pdu` | `TransportPDU`: incremental reader for CCSDS source packets, with header fields (`apid()`, `sequence_flag()`, `sequence_count()`, `length()`, ...) and `verify_crc()` |
| `lritkit.correlator` | `correlate(data)`: finds the best match against the four encoded sync words and returns a `Correlation` (`position`, `value`, `type`) with a `CorrelationType` |
| `lritkit.derandomizer` | `Derandomizer`: removes the CCSDS pseudo-random sequence from a 1020-byte frame |
| `lritkit.viterbi` | `Viterbi`: the rate 1/2, K=7 convolutional code, with `encode`, `decode_soft`, `compare_soft` and `encode_length` |
| `lritkit.reed_solomon` | `ReedSolomon`: (255,223) CCSDS Reed-Solomon in dual-basis representation with 4-way interleaving. `run(frame)` returns `(data, corrected)` and raises `ReedSolomonError` when a frame cannot be corrected. `encode(data)` builds a frame. |
| `lritkit.sync_words` | `nrzm_encode(data, b)` and `encoded_sync_words()` |
| `lritkit.packetizer` | `Packetizer(reader)`: turns a symbol stream into packets, each with a `Details` record |
| `lritkit.recycling_queue` | `RecyclingQueue(capacity, factory)`: bounded, thread-safe pool that passes items from a writer to a reader and back. Writing to it after it is closed raises `QueueClosedError`. |
| `lritkit.dcs` | `FileHeader`, `Header` and `iter_headers(buf)` for DCS files. Malformed data raises `DCSFormatError`. |
| `lritkit.qbt` | `Fragment`, `Packet`, `Assembler`, `diff_with_wrap` and `is_packet_prefix` for EMWIN QBT packets carried over LRIT |
| `lritkit.emwin` | `File` and `Assembler`: join QBT packets into complete EMWIN files |
| `lritkit.lrit_options`, `lritkit.emwin_options`, `lritkit.packets_options` | `parse_options(argv)` returning `LritOptions`, `EmwinOptions` (with `Mode`) and `PacketsOptions` |
| `lritkit.mathfun` | `sin_ps`, `cos_ps`, `sincos_ps`, `exp_ps`, `log_ps`: single-precision cephes approximations evaluated on arrays |

## Examples

Decoding a file of soft symbols, one byte per symbol:

```python
from lritkit.packetizer import Packetizer

with open("symbols.raw", "rb") as stream:
    for packet, details in Packetizer(stream):
        if packet is None:
            print("uncorrectable frame at symbol", details.symbol_pos)
        else:
            print(details.correlation_type, details.reed_solomon_bytes, len(packet))
```

Checking a transport PDU:

```python
from lritkit.transport_pdu import TransportPDU

tpdu = TransportPDU()
consumed = tpdu.read(raw_bytes)
if tpdu.data_complete() and tpdu.verify_crc():
    print(tpdu.apid(), tpdu.sequence_count(), tpdu.length())
```

Walking the messages in the data section of a DCS file:

```python
from lritkit.dcs import iter_headers

for header in iter_headers(payload):
    print(header.address, header.time, header.data_length)
```

Assembling EMWIN files from QBT fragments:

```python
from lritkit import emwin, qbt

qbt_assembler = qbt.Assembler()
emwin_assembler = emwin.Assembler()

for fragment in fragments:
    packet = qbt_assembler.process(fragment)
    if packet is None:
        continue
    complete = emwin_assembler.process(packet)
    if complete is not None:
        with open(complete.filename(), "wb") as out:
            out.write(complete.data())
```

## What the package does not do

- It has no command that reads symbols and writes the decoded packets to
  disk. Decoding goes through `Packetizer`, and the caller stores the
  packets.
- It has no type or command for reading the header fields (spacecraft ID,
  virtual channel ID, counter) of the 892-byte packets.
- The three `parse_options` functions only parse arguments. The package
  has no programs that subscribe to or publish packet streams, record
  them, or write LRIT and EMWIN files from them.
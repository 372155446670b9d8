# aaccore

Pure-Python building blocks for an AAC audio encoder. The package needs only
the standard library.

## Modules

- `aaccore.config` holds the encoder settings (`EncoderConfig`) and the
  description of the incoming audio (`InitParam`). It also has enumerations
  for the MPEG version (`MpegVersion`), the AAC object type (`ObjectType`),
  the PCM input format (`InputFormat`), block-switching control
  (`ShortControl`), the source codec (`Law`) and the G.726 rate (`Rate`).
  `get_version()` returns the configuration version, the version string and
  the release flag as a named tuple. Both dataclasses check their fields and
  raise `ValueError` for values that are out of range.
- `aaccore.coder` holds the frame and block constants, the block types
  (`WindowType`) and the TNS state (`TnsFilterData`, `TnsWindowData` and
  `TnsInfo`).
- `aaccore.util` has helpers that depend on the sample rate:
  - `get_sr_index` gives the sampling-frequency index.
  - `max_bitrate` and `min_bitrate` give the bitrate limits per channel.
  - `bit_allocation` allocates bits from perceptual entropy.
  - `max_bitres_size` gives the size of the bit reservoir.
  - `get_max_pred_sfb` gives the limit of the prediction band.
- `aaccore.lpc` has the linear-prediction tools:
  - `autocorrelation` and `levinson_durbin`.
  - `step_up` converts reflection coefficients into predictor coefficients.
  - `quantize_reflection_coeffs` and `truncate_coeffs` quantise and trim the
    coefficients.
  - `tns_inv_filter` is the analysis filter and `tns_filter` the synthesis
    filter. Both work on a list in place.
- `aaccore.tns` does Temporal Noise Shaping:
  - `tns_init` sets the band and order limits for a profile.
  - `tns_encode` analyses a spectrum and filters it in place where the
    prediction gain is high enough. Short blocks are left alone.
  - `tns_encode_filter_only` applies filters that were already chosen.
  - `tns_decode_filter_only` undoes them.
- `aaccore.hufftab` has the spectral Huffman codebooks 1–11 and the
  scale-factor codebook 12. `codebook(book)` returns a whole book.
  `codeword(book, index)` returns one `(length, code)` pair.

## Installation

```
pip install .
```

To run the tests, install the `test` extra and run pytest:

```
pip install .[test]
pytest
```

## Examples

```python
from aaccore.util import get_sr_index, max_bitrate
from aaccore.hufftab import codeword

index = get_sr_index(44100)     # 4
ceiling = max_bitrate(44100)    # highest bitrate per channel at 44.1 kHz
length, code = codeword(1, 40)  # the all-zero quad in codebook 1: (1, 0)
```

TNS filters a spectrum in place. Set up a `TnsInfo` for a sample rate and a
profile, then pass in one long block. The band layout below is only an
illustration. A real encoder uses the scale-factor band offsets for its
sample rate.

```python
import math

from aaccore.coder import TnsInfo, WindowType
from aaccore.config import MpegVersion, ObjectType
from aaccore.tns import tns_decode_filter_only, tns_encode, tns_init
from aaccore.util import get_sr_index

info = TnsInfo()
tns_init(info, get_sr_index(44100), ObjectType.LOW, MpegVersion.MPEG4)

spectrum = [math.cos(0.05 * i) * (1.0 + 0.5 * math.sin(0.3 * i)) for i in range(1024)]
sfb_offsets = list(range(0, 1025, 16))   # 64 bands of 16 lines each
bands = 49

tns_encode(info, bands, bands, WindowType.ONLY_LONG_WINDOW, sfb_offsets, spectrum)
if info.tns_data_present:
    # The synthesis filter brings back the original spectrum, up to rounding.
    tns_decode_filter_only(info, bands, bands, WindowType.ONLY_LONG_WINDOW,
                           sfb_offsets, spectrum)
```

## What the package does not do

These are parts only, not a working encoder. The package has:

- no psychoacoustic model,
- no transform,
- no quantiser,
- no bitstream or ADTS writer,
- no G.711 or G.726 decoding,
- no command-line tool.

`EncoderConfig` and `InitParam` describe an encoder and its input, but nothing
in the package turns PCM or G.711/G.726 audio into AAC frames.
"""Extraction and execution of the player script's URL descrambling functions.

The watch page references a player script. Two small functions inside it undo
the obfuscation applied to stream URLs: one answers the `n` challenge embedded
in a URL, the other descrambles the signature of a `signatureCipher`. Their
names change with every player release, so they're found by the shape of their
first statement and renamed to `ncode` and `sigcode` before being loaded into
yt-dlp's JavaScript interpreter.
"""

import logging
import re
from typing import Dict, Optional
from urllib.parse import unquote

from yt_dlp.jsinterp import JSInterpreter
from yt_dlp.utils import ExtractorError

from .errors import DecodeError, ExtractionError, ScriptError

logger = logging.getLogger(__name__)

N_FUNCTION = "ncode"
SIG_FUNCTION = "sigcode"

PLAYER_PATH_MARKER = 'c="/'
N_FUNCTION_RE = re.compile(r'([\w$]+)=function\(a\)\{var b=a\.sp')
N_FUNCTION_END = "\ng"
SIG_FUNCTION_RE = re.compile(r'([\w$]+)=function\(a\)\{a=a\.split\(""')
SIG_FUNCTION_END = ";\n"

# The helper object the signature function calls into
HELPER_OBJECT = (
    "var VF={RV:function(a,b){var c=a[0];a[0]=a[b%a.length];a[b%a.length]=c},"
    "p4:function(a,b){a.splice(0,b)},wa:function(a){a.reverse()}};"
)


class ScriptEngine:
    """The extracted functions, loaded once and called by their fixed names."""

    def __init__(self, source: str):
        self.source = source
        self._interpreter = JSInterpreter(source)

    def call(self, name: str, arg: str) -> str:
        try:
            result = self._interpreter.call_function(name, arg)
        except ExtractorError as e:
            raise ScriptError(f"Player function `{name}` failed: {e}") from e
        if not isinstance(result, str):
            raise ScriptError(f"Player function `{name}` returned {type(result).__name__}, not a string")
        return result


def find_player_path(watch_html: str) -> str:
    """The `/s/player/.../base.js` path referenced by a watch page."""
    start = watch_html.find(PLAYER_PATH_MARKER)
    if start < 0:
        raise ExtractionError("Watch page no longer references the player script")
    start += len(PLAYER_PATH_MARKER) - 1
    end = watch_html.find('"', start)
    if end < 0:
        raise ExtractionError("Player script path is not terminated")
    return watch_html[start:end]


def _cut_function(player_js: str, pattern: re.Pattern, end_marker: str, what: str) -> str:
    """Cut a function definition out of the player and return its body, without the name."""
    match = pattern.search(player_js)
    if match is None:
        raise ExtractionError(f"Player script no longer contains the {what} function")
    end = player_js.find(end_marker, match.start())
    if end < 0:
        raise ExtractionError(f"The {what} function in the player script is not terminated")
    definition = player_js[match.end(1) + 1:end]
    return definition.rstrip().rstrip(";")


def build_script(player_js: str) -> str:
    """The minimal script holding both functions under fixed names, plus their helper."""
    n_function = _cut_function(player_js, N_FUNCTION_RE, N_FUNCTION_END, "n challenge")
    sig_function = _cut_function(player_js, SIG_FUNCTION_RE, SIG_FUNCTION_END, "signature")
    return (
        f"var {N_FUNCTION}={n_function};\n"
        f"{HELPER_OBJECT}\n"
        f"var {SIG_FUNCTION}={sig_function};\n"
    )


def load_engine(player_js: str) -> ScriptEngine:
    source = build_script(player_js)
    logger.info(f"Loaded player functions ({len(source)} characters)")
    return ScriptEngine(source)


def solve_n_challenge(url: str, engine: ScriptEngine, cache: Optional[Dict[str, str]] = None) -> str:
    """Replace the token after `&n=` with its answer, leaving the rest of the URL untouched.

    Video and audio of one video share the token, so answers are memoised in `cache`.
    """
    start = url.find("&n=")
    if start < 0:
        return url
    start += len("&n=")
    end = url.find("&", start)
    if end < 0:
        end = len(url)

    token = url[start:end]
    if cache is not None and token in cache:
        answer = cache[token]
    else:
        answer = engine.call(N_FUNCTION, token)
        if cache is not None:
            cache[token] = answer
    return url[:start] + answer + url[end:]


def _cipher_fields(signature_cipher: str) -> Dict[str, str]:
    fields = {}
    for part in signature_cipher.split("&"):
        name, _, value = part.partition("=")
        fields[name] = value
    for name in ("s", "sp", "url"):
        if name not in fields:
            raise DecodeError(f"signature cipher has no `{name}` field", "signatureCipher")
    return fields


def decipher_signature(signature_cipher: str, engine: ScriptEngine) -> str:
    """Turn a `signatureCipher` into a URL carrying the descrambled signature.

    The signature function only shuffles characters, so it's called on a string
    whose characters are their own positions, and the positions it returns are
    looked up in the real signature.
    """
    fields = _cipher_fields(signature_cipher)
    signature = unquote(fields["s"])
    param = unquote(fields["sp"])
    # The URL is percent encoded twice
    url = unquote(unquote(fields["url"]))

    positions = engine.call(SIG_FUNCTION, "".join(chr(i) for i in range(len(signature))))
    try:
        descrambled = "".join(signature[ord(c)] for c in positions)
    except IndexError:
        raise ScriptError("Signature function returned an out of range position") from None
    return f"{url}&{param}={descrambled}"

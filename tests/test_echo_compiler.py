from bladewire.compiler.interpolation.blade import BladeEchoCompiler


def compile_echos(value: str) -> str:
    return BladeEchoCompiler().compile_echos(value)


def test_regular_echo_is_escaped() -> None:
    assert compile_echos("Hi {{ $name }}!") == "Hi <?php echo e($name); ?>!"


def test_raw_echo() -> None:
    assert compile_echos("{!! $html !!}") == "<?php echo $html; ?>"


def test_triple_brace_echo() -> None:
    assert compile_echos("{{{ $a }}}") == "<?php echo e($a); ?>"


def test_at_sign_escapes_echo() -> None:
    assert compile_echos("@{{ $a }}") == "{{ $a }}"


def test_trailing_semicolon_is_dropped() -> None:
    assert compile_echos("{{ $a; }}") == "<?php echo e($a); ?>"


def test_trailing_newline_is_doubled() -> None:
    assert compile_echos("{{ $a }}\n") == "<?php echo e($a); ?>\n\n"


def test_text_without_echos_is_untouched() -> None:
    assert compile_echos("plain { text }") == "plain { text }"

from __future__ import annotations

import pytest

from encoding_detection.model import train

# Plain Cyrillic + ASCII punctuation only, so the UTF-8 form uses two-byte
# sequences (0xD0/0xD1 leads) and the Windows-1251 form stays in 0xC0-0xFF.
RUSSIAN_TEXT = (
    "Ну что, князь, Генуя и Лукка стали не больше как поместьями фамилии "
    "Бонапарте. Нет, я вам вперед говорю, если вы мне не скажете, что у нас "
    "война, если вы еще позволите себе защищать все гадости, все ужасы этого "
    "Антихриста, то я вас больше не знаю, вы уже не друг мой, вы уже не мой "
    "верный раб, как вы говорите.\n"
    "Так говорила в июле 1805 года известная Анна Павловна Шерер, фрейлина и "
    "приближенная императрицы Марии Феодоровны, встречая важного и чиновного "
    "князя Василия, первого приехавшего на ее вечер. Анна Павловна кашляла "
    "несколько дней, у нее был грипп, как она говорила.\n"
    "Все ее пригласительные записки без различия были написаны одинаково: "
    "если у вас, граф или князь, нет в виду ничего лучшего и если перспектива "
    "вечера у бедной больной не слишком вас пугает, то я буду очень рада "
    "видеть вас нынче у себя между семью и десятью часами.\n"
    "Господи, какая горячая выходка! отвечал, нисколько не смутясь такою "
    "встречей, вошедший князь, в придворном, шитом мундире, в чулках, "
    "башмаках и звездах, с светлым выражением плоского лица. Он говорил на "
    "том изысканном языке, на котором не только говорили, но и думали наши "
    "деды, и с теми тихими, покровительственными интонациями, которые "
    "свойственны состарившемуся в свете и при дворе значительному человеку.\n"
)

SAMPLE_SENTENCE = "Анна Павловна кашляла несколько дней, у нее был грипп."


@pytest.fixture
def sample_sentence() -> str:
    return SAMPLE_SENTENCE


@pytest.fixture
def utf8_corpus() -> bytes:
    return RUSSIAN_TEXT.encode("utf-8")


@pytest.fixture
def win1251_corpus() -> bytes:
    return RUSSIAN_TEXT.encode("cp1251")


@pytest.fixture
def models(utf8_corpus, win1251_corpus):
    return train(utf8_corpus, win1251_corpus)


@pytest.fixture
def corpus_files(tmp_path, monkeypatch, utf8_corpus, win1251_corpus):
    """Reference corpora on disk, wired in through the ENCDETECT_* variables."""
    data = tmp_path / "data"
    data.mkdir()
    utf8_path = data / "war-and-peace-utf-8.txt"
    win_path = data / "war-and-peace-windows-1251.txt"
    utf8_path.write_bytes(utf8_corpus)
    win_path.write_bytes(win1251_corpus)

    monkeypatch.setenv("ENCDETECT_DATA_DIR", str(data))
    monkeypatch.delenv("ENCDETECT_UTF8_CORPUS", raising=False)
    monkeypatch.delenv("ENCDETECT_WIN1251_CORPUS", raising=False)
    monkeypatch.delenv("ENCDETECT_VERBOSE", raising=False)
    monkeypatch.setenv("ENCDETECT_ART_DIR", str(tmp_path / "artifacts"))
    return utf8_path, win_path

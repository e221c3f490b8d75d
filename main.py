"""
Image-to-Anki Card Generator
----------------------------
Scans a folder of images and turns the foreign-language text in each one
into Anki vocabulary cards using a local vision model and AnkiConnect.
"""


from cli import generate

if __name__ == '__main__':
    generate()

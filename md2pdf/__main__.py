from md2pdf.cli import run

if __name__ == "__main__":
	run()

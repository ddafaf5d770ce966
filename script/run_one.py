from thresholdbench.pipeline import run_pipeline

if __name__ == "__main__":
    result = run_pipeline("data/input/sample_1920_1080_n120_b08.png")
    print(result["threshold_used"], result["binary_png"])

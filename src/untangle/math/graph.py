"""Matrix graph theory: dominant eigenvector, degree balance, PageRank."""

import numpy as np

from ..exceptions import SpectralDecompositionError


class GraphMetrics:
    """Graph theory calculations on dense adjacency matrices.

    All methods take an N x N non-negative ``float`` array where
    ``matrix[i, j]`` is the weight of the edge i -> j. Validation of that
    contract is the caller's job (see StructuralScorer).
    """

    @staticmethod
    def dominant_eigenvector(matrix: np.ndarray, imaginary_tolerance: float = 1e-9) -> np.ndarray:
        """
        Absolute components of the eigenvector of the largest eigenvalue.

        "Largest" compares real parts; among equal real parts the first one
        returned by LAPACK wins.

        Args:
            matrix: N x N adjacency matrix
            imaginary_tolerance: Largest imaginary part (relative to the
                eigenvalue magnitude, floored at 1) accepted as real

        Returns:
            Array of N non-negative components

        Raises:
            SpectralDecompositionError: If LAPACK fails, produces non-finite
                values, or the dominant eigenpair is not real
        """
        n = matrix.shape[0]
        if n == 0:
            return np.zeros(0)

        try:
            eigenvalues, eigenvectors = np.linalg.eig(matrix)
        except np.linalg.LinAlgError as e:
            raise SpectralDecompositionError(str(e)) from e

        if not (np.all(np.isfinite(eigenvalues)) and np.all(np.isfinite(eigenvectors))):
            raise SpectralDecompositionError("non-finite eigen-decomposition")

        idx = int(np.argmax(eigenvalues.real))
        dominant = eigenvalues[idx]
        if abs(dominant.imag) > imaginary_tolerance * max(1.0, abs(dominant)):
            raise SpectralDecompositionError(f"dominant eigenvalue {dominant} is not real")

        vector = eigenvectors[:, idx]
        if np.iscomplexobj(vector):
            if np.max(np.abs(vector.imag)) > imaginary_tolerance * max(1.0, np.max(np.abs(vector))):
                raise SpectralDecompositionError("dominant eigenvector is not real")
            vector = vector.real

        return np.abs(vector)

    @staticmethod
    def degree_balance(matrix: np.ndarray) -> np.ndarray:
        """
        Fan-in / fan-out balance per vertex.

        score_i = 2 * in_i + (N - out_i)

        where in_i / out_i are weighted column / row sums. High values mean
        many modules lean on i while i itself leans on few.
        """
        n = matrix.shape[0]
        in_degree = matrix.sum(axis=0)
        out_degree = matrix.sum(axis=1)
        return 2.0 * in_degree + (n - out_degree)

    @staticmethod
    def pagerank(matrix: np.ndarray, damping: float = 0.85, iterations: int = 20) -> np.ndarray:
        """
        PageRank by a fixed number of power iterations.

        PR'(i) = (1 - d) / N + d * Σ_j PR(j) * M[j, i] / W(j)

        W(j) is the total outgoing weight of j. Rows with W(j) = 0 contribute
        nothing (their mass is not redistributed), and there is no early
        convergence exit: ``iterations`` is the exact step count.

        Args:
            matrix: N x N adjacency matrix
            damping: Damping factor (0.85 is standard)
            iterations: Number of update steps

        Returns:
            Array of N scores
        """
        n = matrix.shape[0]
        if n == 0:
            return np.zeros(0)

        out_weight = matrix.sum(axis=1)
        transition = np.zeros_like(matrix, dtype=float)
        np.divide(matrix, out_weight[:, None], out=transition, where=out_weight[:, None] > 0)

        scores = np.full(n, 1.0 / n)
        for _ in range(iterations):
            scores = (1.0 - damping) / n + damping * (scores @ transition)

        return scores

    @staticmethod
    def real_spectrum(matrix: np.ndarray) -> list[float]:
        """Real parts of the eigenvalues, largest first. Empty on failure."""
        if matrix.shape[0] == 0:
            return []
        try:
            eigenvalues = np.linalg.eigvals(matrix)
        except np.linalg.LinAlgError:
            return []
        if not np.all(np.isfinite(eigenvalues)):
            return []
        return sorted((float(v) for v in eigenvalues.real), reverse=True)

    @staticmethod
    def reachability(matrix: np.ndarray) -> np.ndarray:
        """
        Transitive closure by repeated boolean squaring.

        R_1 = (A > 0), R_2k = R_k ∨ (R_k · R_k). Stops once a squaring adds
        nothing, so at most ⌈log2 N⌉ + 1 products are taken.

        Returns:
            Boolean N x N array; ``R[i, j]`` is True iff j is reachable from i
            by a path of one or more edges.
        """
        reach = matrix > 0
        while True:
            step = reach.astype(float)
            expanded = reach | ((step @ step) > 0)
            if np.array_equal(expanded, reach):
                return reach
            reach = expanded

"""
Screen payloads: start, game over and one play screen per game type
"""
from typing import Dict

from ...constants import GameType


# $title is a JSX string expression, e.g. {"Space Invaders 3D"}
START_SCREEN = """import React from 'react'

interface StartScreenProps {
  onStartGame: () => void
}

const StartScreen: React.FC<StartScreenProps> = ({ onStartGame }) => {
  return (
    <div className="w-full h-full flex flex-col items-center justify-center bg-gradient-to-b from-blue-400 to-purple-600">
      <div className="text-center p-8">
        <h1 className="text-6xl font-bold text-white mb-8 animate-pulse">
          $title
        </h1>
        <p className="text-xl text-white mb-8">
          Get ready for an amazing adventure!
        </p>
        <button
          onClick={onStartGame}
          className="px-8 py-4 bg-yellow-400 text-gray-800 font-bold text-xl rounded-full
                     hover:bg-yellow-300 transform hover:scale-110 transition-all duration-200
                     shadow-lg active:scale-95"
        >
          Start Game
        </button>
      </div>
    </div>
  )
}

export default StartScreen"""


# Confetti overlay is dismissed after 3.5 seconds
GAME_OVER_SCREEN = """import React, { useEffect, useState } from 'react'
import ConfettiExplosion from 'react-confetti-explosion'

interface GameOverScreenProps {
  score: number
  onPlayAgain: () => void
}

const GameOverScreen: React.FC<GameOverScreenProps> = ({ score, onPlayAgain }) => {
  const [showConfetti, setShowConfetti] = useState(true)

  useEffect(() => {
    const timer = setTimeout(() => setShowConfetti(false), 3500)
    return () => clearTimeout(timer)
  }, [])

  return (
    <div className="w-full h-full flex flex-col items-center justify-center bg-gradient-to-b from-purple-600 to-pink-600">
      {showConfetti && (
        <ConfettiExplosion
          className="fixed bottom-[50vh] left-[50vw]"
          colors={['#FFD700', '#FF69B4', '#00CED1', '#32CD32']}
          particleCount={120}
          particleSize={20}
          duration={3500}
          zIndex={99999}
          force={2}
          height={'100vh'}
          width={1800}
        />
      )}

      <div className="text-center p-8 z-10">
        <h1 className="text-6xl font-bold text-white mb-4">
          Game Over!
        </h1>
        <div className="text-4xl text-yellow-300 mb-8">
          Score: {score}
        </div>
        <button
          onClick={onPlayAgain}
          className="px-8 py-4 bg-green-400 text-gray-800 font-bold text-xl rounded-full
                     hover:bg-green-300 transform hover:scale-110 transition-all duration-200
                     shadow-lg active:scale-95"
        >
          Play Again
        </button>
      </div>
    </div>
  )
}

export default GameOverScreen"""


PLATFORMER_GAME_SCREEN = """import React, { useState } from 'react'
import Player from '../components/Player'
import Platform from '../components/Platform'
import { useGameControls } from '../hooks/useGameControls'

interface GameScreenProps {
  onGameOver: (score: number) => void
}

const GameScreen: React.FC<GameScreenProps> = ({ onGameOver }) => {
  const [score, setScore] = useState(0)
  const controls = useGameControls()

  // Simple platform positions
  const platforms = [
    { position: [0, -2, 0], size: [10, 0.5, 2] },
    { position: [5, 0, 0], size: [3, 0.5, 2] },
    { position: [-5, 1, 0], size: [3, 0.5, 2] },
  ]

  return (
    <>
      <ambientLight intensity={0.5} />
      <directionalLight position={[10, 10, 5]} intensity={1} castShadow />

      <Player controls={controls} onFall={() => onGameOver(score)} />

      {platforms.map((platform, index) => (
        <Platform key={index} {...platform} />
      ))}

      <mesh position={[0, -10, 0]} rotation={[-Math.PI / 2, 0, 0]}>
        <planeGeometry args={[100, 100]} />
        <meshStandardMaterial color="red" />
      </mesh>
    </>
  )
}

export default GameScreen"""


PUZZLE_GAME_SCREEN = """import React from 'react'
import { OrbitControls } from '@react-three/drei'
import PuzzleGrid from '../components/PuzzleGrid'
import { usePuzzleLogic } from '../hooks/usePuzzleLogic'

interface GameScreenProps {
  onGameOver: (score: number) => void
}

const GameScreen: React.FC<GameScreenProps> = ({ onGameOver }) => {
  const { grid, score, makeMove, checkWinCondition } = usePuzzleLogic()

  const handleMove = (from: [number, number], to: [number, number]) => {
    makeMove(from, to)
    if (checkWinCondition()) {
      onGameOver(score)
    }
  }

  return (
    <>
      <ambientLight intensity={0.6} />
      <directionalLight position={[10, 10, 5]} intensity={0.8} />
      <OrbitControls enablePan={false} />

      <PuzzleGrid
        grid={grid}
        onMove={handleMove}
      />
    </>
  )
}

export default GameScreen"""


ENDLESS_RUNNER_GAME_SCREEN = """import React, { useState, useRef } from 'react'
import { useFrame } from '@react-three/fiber'
import Runner from '../components/Runner'
import Obstacle from '../components/Obstacle'
import { useRunnerControls } from '../hooks/useRunnerControls'

interface GameScreenProps {
  onGameOver: (score: number) => void
}

const GameScreen: React.FC<GameScreenProps> = ({ onGameOver }) => {
  const [score, setScore] = useState(0)
  const [obstacles, setObstacles] = useState<Array<{id: number, position: [number, number, number]}>>([])
  const controls = useRunnerControls()
  const speed = useRef(5)

  useFrame((state, delta) => {
    // Update score
    setScore(prev => prev + delta * 10)

    // Increase speed over time
    speed.current = Math.min(speed.current + delta * 0.1, 15)

    // Spawn obstacles
    if (Math.random() < 0.02) {
      setObstacles(prev => [...prev, {
        id: Date.now(),
        position: [Math.random() * 4 - 2, 0.5, 20]
      }])
    }

    // Move and cleanup obstacles
    setObstacles(prev =>
      prev.map(obs => ({
        ...obs,
        position: [obs.position[0], obs.position[1], obs.position[2] - speed.current * delta] as [number, number, number]
      }))
      .filter(obs => obs.position[2] > -5)
    )
  })

  return (
    <>
      <ambientLight intensity={0.5} />
      <directionalLight position={[10, 10, 5]} intensity={1} castShadow />

      <Runner
        controls={controls}
        onCollision={() => onGameOver(Math.floor(score))}
      />

      {obstacles.map(obstacle => (
        <Obstacle key={obstacle.id} position={obstacle.position} />
      ))}

      <mesh position={[0, -0.5, 0]} rotation={[-Math.PI / 2, 0, 0]}>
        <planeGeometry args={[10, 100]} />
        <meshStandardMaterial color="#8B4513" />
      </mesh>
    </>
  )
}

export default GameScreen"""


PHYSICS_GAME_SCREEN = """import React, { useState } from 'react'
import { OrbitControls } from '@react-three/drei'
import PhysicsObject from '../components/PhysicsObject'
import { usePhysicsInteraction } from '../hooks/usePhysicsInteraction'

interface GameScreenProps {
  onGameOver: (score: number) => void
}

const GameScreen: React.FC<GameScreenProps> = ({ onGameOver }) => {
  const [score, setScore] = useState(0)
  const { objects, addObject, removeObject } = usePhysicsInteraction()

  return (
    <>
      <ambientLight intensity={0.5} />
      <directionalLight position={[10, 10, 5]} intensity={1} castShadow />
      <OrbitControls />

      {objects.map(obj => (
        <PhysicsObject
          key={obj.id}
          {...obj}
          onScore={(points) => setScore(prev => prev + points)}
        />
      ))}

      <mesh position={[0, -5, 0]} rotation={[-Math.PI / 2, 0, 0]}>
        <planeGeometry args={[50, 50]} />
        <meshStandardMaterial color="#228B22" />
      </mesh>
    </>
  )
}

export default GameScreen"""


ARCADE_GAME_SCREEN = """import React, { useState } from 'react'
import { useFrame } from '@react-three/fiber'
import PlayerShip from '../components/PlayerShip'
import Enemy from '../components/Enemy'
import Projectile from '../components/Projectile'
import { useArcadeControls } from '../hooks/useArcadeControls'

interface GameScreenProps {
  onGameOver: (score: number) => void
}

const GameScreen: React.FC<GameScreenProps> = ({ onGameOver }) => {
  const [score, setScore] = useState(0)
  const [enemies, setEnemies] = useState<Array<{id: number, position: [number, number, number]}>>([])
  const [projectiles, setProjectiles] = useState<Array<{id: number, position: [number, number, number]}>>([])
  const controls = useArcadeControls()

  useFrame((state, delta) => {
    // Spawn enemies
    if (Math.random() < 0.02) {
      setEnemies(prev => [...prev, {
        id: Date.now(),
        position: [Math.random() * 10 - 5, 5, 0]
      }])
    }

    // Move enemies
    setEnemies(prev =>
      prev.map(enemy => ({
        ...enemy,
        position: [enemy.position[0], enemy.position[1] - delta * 2, enemy.position[2]] as [number, number, number]
      }))
      .filter(enemy => enemy.position[1] > -5)
    )
  })

  return (
    <>
      <ambientLight intensity={0.5} />
      <directionalLight position={[10, 10, 5]} intensity={1} />

      <PlayerShip
        controls={controls}
        onShoot={(position) => {
          setProjectiles(prev => [...prev, {
            id: Date.now(),
            position
          }])
        }}
      />

      {enemies.map(enemy => (
        <Enemy key={enemy.id} position={enemy.position} />
      ))}

      {projectiles.map(projectile => (
        <Projectile key={projectile.id} position={projectile.position} />
      ))}
    </>
  )
}

export default GameScreen"""


GAME_SCREENS: Dict[GameType, str] = {
    GameType.PLATFORMER: PLATFORMER_GAME_SCREEN,
    GameType.PUZZLE: PUZZLE_GAME_SCREEN,
    GameType.ENDLESS_RUNNER: ENDLESS_RUNNER_GAME_SCREEN,
    GameType.PHYSICS_BASED: PHYSICS_GAME_SCREEN,
    GameType.ARCADE: ARCADE_GAME_SCREEN,
}
